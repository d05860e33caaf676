# Backend main entry point - IDN report ingestion API
import logging
import os
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Optional, List
from dataclasses import asdict
from config import DOCUMENTS_PATH, FRONTEND_URL, LOG_LEVEL, is_demo_mode
from models import clients, inflammations
from groupings import get_grouping_catalog
from idn_parser import ReportReadError
from idn_store import get_client_idn_summary, ingest_idn_report_file, ingest_idn_text, reset_processed_data
from seed import seed_data

logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO))
logger = logging.getLogger(__name__)

# Initialize seed data
seed_data()

app = FastAPI(title="IDN Report Ingestion API")

# Configure CORS - allow local dev and the deployed frontend
_allowed_origins = [
    "http://localhost:5173",
    "http://localhost:5174",
]
if FRONTEND_URL:
    _allowed_origins.append(FRONTEND_URL)

app.add_middleware(
    CORSMiddleware,
    allow_origins=_allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Request/Response models
class ClientResponse(BaseModel):
    clientId: str
    clientNumber: int
    fullName: str
    email: Optional[str] = None

class GroupingResponse(BaseModel):
    groupName: str
    inflammations: List[str]

class IdnTextUpload(BaseModel):
    documentName: str = Field(min_length=1)
    content: str

class IdnDocumentUpload(BaseModel):
    documentName: str = Field(min_length=1)

@app.get("/")
def read_root():
    return {"message": "IDN Report Ingestion API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/clients", response_model=List[ClientResponse])
def get_all_clients():
    """Get all clients"""
    return [ClientResponse(**asdict(client)) for client in clients.values()]

@app.get("/clients/{client_id}", response_model=ClientResponse)
def get_client(client_id: str):
    client = clients.get(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return ClientResponse(**asdict(client))


@app.get("/inflammations")
def get_inflammations():
    return {"inflammations": list(inflammations)}

@app.get("/inflammation-groupings", response_model=List[GroupingResponse])
def get_inflammation_groupings():
    """Biological inflammation grouping catalog, in matching order"""
    return [GroupingResponse(**asdict(g)) for g in get_grouping_catalog()]


@app.post("/clients/{client_id}/idn-reports")
def upload_idn_report(client_id: str, upload: IdnTextUpload):
    """
    Parse an uploaded IDN text export and merge it into the client's scans.
    A scan type already stored for the client is replaced, a new one is appended.
    """
    result = ingest_idn_text(client_id, upload.content, upload.documentName)
    if "error" in result:
        logger.warning("IDN upload %s rejected for client %s: %s", upload.documentName, client_id, result["error"])
        raise HTTPException(status_code=404, detail=result["error"])
    return result

@app.post("/clients/{client_id}/idn-reports/from-document")
def ingest_idn_document(client_id: str, upload: IdnDocumentUpload):
    """Parse an IDN export already saved under DOCUMENTS_PATH."""
    document_name = os.path.basename(upload.documentName)
    path = os.path.join(DOCUMENTS_PATH, document_name)
    try:
        result = ingest_idn_report_file(client_id, path, document_name)
    except ReportReadError as exc:
        logger.warning("IDN document %s for client %s unreadable: %s", document_name, client_id, exc.reason)
        raise HTTPException(status_code=400, detail=f"Could not read document {document_name}") from exc
    if "error" in result:
        logger.warning("IDN document %s rejected for client %s: %s", document_name, client_id, result["error"])
        raise HTTPException(status_code=404, detail=result["error"])
    return result

@app.get("/clients/{client_id}/processed-data")
def get_processed_data(client_id: str):
    """Stored scans with per-scan-type averages and matched groupings"""
    result = get_client_idn_summary(client_id)
    if "error" in result:
        raise HTTPException(status_code=404, detail=result["error"])
    return result


@app.get("/demo/status")
def demo_status():
    """Returns whether demo mode is enabled. Only for frontend visibility gate."""
    return {"demoMode": is_demo_mode()}


@app.post("/demo/reset")
def demo_reset():
    """
    Reset prototype to baseline. Only available when DEMO_MODE=true.
    Restores seed data and clears processed IDN data.
    """
    if not is_demo_mode():
        raise HTTPException(status_code=404, detail="Demo reset not available")
    seed_data()
    reset_processed_data()
    return {"status": "ok"}

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
