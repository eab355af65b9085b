import os
import sys
from pathlib import Path

import boto3
import httpx
from botocore.client import Config
import pytest
import pytest_asyncio
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

# Ensure project root is on sys.path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from cliniko import ClinikoClient
from cliniko.core.config import get_settings

API_URL = "https://api.test.cliniko.com/v1"
S3_URL = "https://bucket.s3.amazonaws.com"
API_KEY = "MS0xMjM0NTY3ODktYWJj-au1"


def presigned_fields(patient_id: str) -> dict[str, str]:
    """Real presigned POST fields, signed offline with dummy credentials."""
    s3 = boto3.client(
        "s3",
        region_name="us-east-1",
        aws_access_key_id="test",
        aws_secret_access_key="test",
        config=Config(signature_version="s3v4"),
    )
    prefix = f"attachments/{patient_id}/"
    post = s3.generate_presigned_post(
        Bucket="bucket",
        Key=prefix + "${filename}",
        Fields={"acl": "private", "success_action_status": "201"},
        Conditions=[
            {"acl": "private"},
            {"success_action_status": "201"},
            ["starts-with", "$key", prefix],
        ],
        ExpiresIn=3600,
    )
    return post["fields"]


def post_response_xml(key: str | None) -> bytes:
    key_element = f"<Key>{key}</Key>" if key is not None else ""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        "<PostResponse>"
        f"<Location>{S3_URL}/{key or ''}</Location>"
        "<Bucket>bucket</Bucket>"
        f"{key_element}"
        '<ETag>"d41d8cd98f00b204e9800998ecf8427e"</ETag>'
        "</PostResponse>"
    ).encode("utf-8")


def create_api_app() -> FastAPI:
    app = FastAPI()
    app.state.calls = []
    app.state.presigned_status = 200
    app.state.attachment_status = 201
    app.state.patients = {
        "1": {"id": "1", "first_name": "Ada", "last_name": "Lovelace", "email": "ada@example.com"},
        "2": {"id": "2", "first_name": "Alan", "last_name": "Turing", "email": None},
    }

    @app.get("/v1/patients/{patient_id}/attachment_presigned_post")
    async def attachment_presigned_post(patient_id: str, request: Request):
        app.state.calls.append(("presigned_post", patient_id, dict(request.headers)))
        if app.state.presigned_status != 200:
            return JSONResponse({"errors": {"patient": ["not found"]}}, status_code=app.state.presigned_status)
        return {"url": S3_URL, "fields": presigned_fields(patient_id)}

    @app.post("/v1/patient_attachments")
    async def create_patient_attachment(request: Request):
        payload = await request.json()
        app.state.calls.append(("create_attachment", payload))
        if app.state.attachment_status != 201:
            return JSONResponse({"errors": {"upload_url": ["is invalid"]}}, status_code=app.state.attachment_status)
        return JSONResponse(
            {
                "id": "9001",
                "description": payload.get("description"),
                "filename": payload["upload_url"].rsplit("/", 1)[-1],
                "content_type": "application/octet-stream",
                "created_at": "2026-10-18T08:00:00Z",
                "links": {"self": f"{API_URL}/patient_attachments/9001"},
            },
            status_code=201,
        )

    @app.get("/v1/patients")
    async def list_patients(request: Request):
        app.state.calls.append(("list_patients", list(request.query_params.multi_items())))
        patients = list(app.state.patients.values())
        return {
            "patients": patients,
            "total_entries": len(patients),
            "links": {"self": f"{API_URL}/patients?page=1"},
        }

    @app.get("/v1/patients/{patient_id}")
    async def get_patient(patient_id: str):
        patient = app.state.patients.get(patient_id)
        if patient is None:
            return JSONResponse({"message": "Not found"}, status_code=404)
        return patient

    @app.post("/v1/patients")
    async def create_patient(request: Request):
        payload = await request.json()
        patient = {"id": str(len(app.state.patients) + 1), **payload}
        app.state.patients[patient["id"]] = patient
        return JSONResponse(patient, status_code=201)

    @app.patch("/v1/patients/{patient_id}")
    async def update_patient(patient_id: str, request: Request):
        payload = await request.json()
        app.state.patients[patient_id].update(payload)
        return app.state.patients[patient_id]

    @app.get("/v1/appointment_types")
    async def list_appointment_types():
        return {
            "appointment_types": [
                {"id": "7", "name": "Initial consult", "duration_in_minutes": 45},
            ],
            "total_entries": 1,
            "links": {"self": f"{API_URL}/appointment_types"},
        }

    @app.delete("/v1/appointment_types/{type_id}")
    async def delete_appointment_type(type_id: str):
        app.state.calls.append(("delete_appointment_type", type_id))
        return Response(status_code=204)

    return app


def create_s3_app() -> FastAPI:
    """Presigned POST endpoint that answers the way S3 does."""
    app = FastAPI()
    app.state.uploads = []
    app.state.mode = "xml"
    app.state.key_override = None

    @app.post("/")
    async def upload(request: Request):
        form = await request.form()
        upload_file = form["file"]
        content = await upload_file.read()
        fields = [(name, value) for name, value in form.multi_items() if name != "file"]
        app.state.uploads.append(
            {
                "fields": fields,
                "filename": upload_file.filename,
                "content": content,
                "headers": dict(request.headers),
            }
        )

        values = dict(fields)
        key = app.state.key_override or values["key"].replace("${filename}", upload_file.filename)
        mode = app.state.mode
        if mode == "forbidden":
            return Response(
                content=b"<Error><Code>AccessDenied</Code><Message>Invalid according to Policy</Message></Error>",
                status_code=403,
                media_type="application/xml",
            )
        if mode == "json":
            return JSONResponse({"key": key}, status_code=201)
        if mode == "no_key":
            return Response(content=post_response_xml(None), status_code=201, media_type="application/xml")
        if mode == "garbage":
            return Response(content=b"<PostResponse><Key>", status_code=201, media_type="application/xml")
        return Response(
            content=post_response_xml(key),
            status_code=int(values["success_action_status"]),
            media_type="application/xml",
        )

    return app


@pytest.fixture(scope="session", autouse=True)
def configure_environment():
    os.environ["CLINIKO_API_KEY"] = API_KEY
    os.environ["CLINIKO_VENDOR_NAME"] = "Test Vendor"
    os.environ["CLINIKO_VENDOR_EMAIL"] = "vendor@example.com"
    os.environ.pop("CLINIKO_BASE_URL", None)
    get_settings.cache_clear()


@pytest.fixture
def api_app() -> FastAPI:
    return create_api_app()


@pytest.fixture
def s3_app() -> FastAPI:
    return create_s3_app()


@pytest_asyncio.fixture
async def client(api_app, s3_app):
    async with ClinikoClient(
        API_KEY,
        "Test Vendor",
        "vendor@example.com",
        base_url=API_URL,
        api_transport=httpx.ASGITransport(app=api_app),
        storage_transport=httpx.ASGITransport(app=s3_app),
    ) as client:
        yield client
