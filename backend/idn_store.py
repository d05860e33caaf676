# Processed IDN data - merge policy and per-client ingestion into the in-memory store
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import asdict
from typing import Dict, Iterator, Optional, Tuple

from groupings import collect_matched_groupings, compute_scan_type_aggregates, get_grouping_catalog
from idn_parser import parse_idn_report_file, parse_idn_text
from models import ProcessedClientData, ScanReport, clients, processed_client_data

logger = logging.getLogger(__name__)

_client_locks: Dict[str, threading.Lock] = {}
_client_locks_guard = threading.Lock()


@contextmanager
def client_lock(client_id: str) -> Iterator[None]:
    """Serialize fetch-merge-persist for one client; other clients are not blocked."""
    with _client_locks_guard:
        lock = _client_locks.setdefault(client_id, threading.Lock())
    with lock:
        yield


def merge_scan_report(
    stored: Optional[ProcessedClientData],
    client_id: str,
    new_scan: ScanReport,
    document_name: str,
) -> Tuple[ProcessedClientData, bool]:
    """
    Upsert a scan into a client's stored scans, keyed by scanType.

    Same scanType: replaced in place, document names unchanged.
    New scanType: appended along with its document name.
    Returns (merged, replaced). The stored value is never mutated.
    """
    idn_data = list(stored.idnData) if stored else []
    document_names = list(stored.idnReportDocumentName) if stored else []

    for index, scan in enumerate(idn_data):
        if scan.scanType == new_scan.scanType:
            idn_data[index] = new_scan
            merged = ProcessedClientData(clientId=client_id, idnData=idn_data, idnReportDocumentName=document_names)
            return merged, True

    idn_data.append(new_scan)
    document_names.append(document_name)
    merged = ProcessedClientData(clientId=client_id, idnData=idn_data, idnReportDocumentName=document_names)
    return merged, False


def get_processed_client_data(client_id: str) -> Optional[ProcessedClientData]:
    """Rehydrate the client's stored JSON, or None for a client with no uploads"""
    stored = processed_client_data.get(client_id)
    return ProcessedClientData.from_dict(stored) if stored is not None else None


def save_processed_client_data(data: ProcessedClientData) -> None:
    """Insert or replace the client's processed data"""
    processed_client_data[data.clientId] = data.to_dict()


def ingest_idn_report(client_id: str, scan: ScanReport, document_name: str) -> Dict:
    """Merge a parsed scan into the client's stored scans."""
    if client_id not in clients:
        return {"error": "Client not found"}

    with client_lock(client_id):
        stored = get_processed_client_data(client_id)
        merged, replaced = merge_scan_report(stored, client_id, scan, document_name)
        save_processed_client_data(merged)

    logger.info(
        "%s IDN scanType=%s for client %s from %s",
        "Replaced" if replaced else "Appended",
        scan.scanType,
        client_id,
        document_name,
    )
    return {
        "status": "replaced" if replaced else "appended",
        "scanType": scan.scanType,
        "conditionsCount": len(scan.report),
        "idnReportDocumentName": list(merged.idnReportDocumentName),
    }


def ingest_idn_text(client_id: str, content: str, document_name: str) -> Dict:
    if client_id not in clients:
        return {"error": "Client not found"}
    return ingest_idn_report(client_id, parse_idn_text(content), document_name)


def ingest_idn_report_file(client_id: str, path: str, document_name: str) -> Dict:
    """Parse a report file and merge it. ReportReadError propagates; nothing is stored."""
    if client_id not in clients:
        return {"error": "Client not found"}
    return ingest_idn_report(client_id, parse_idn_report_file(path), document_name)


def get_client_idn_summary(client_id: str) -> Dict:
    """
    Stored scans plus display data derived from the current grouping catalog:
    - scanTypes: avg scale/percentage per matched scan, ascending scanType
    - biologicalInflammationGroupNames / biologicalInflammations: every matched grouping
    """
    if client_id not in clients:
        return {"error": "Client not found"}

    stored = get_processed_client_data(client_id) or ProcessedClientData(clientId=client_id)
    catalog = get_grouping_catalog()
    matched = collect_matched_groupings(stored.idnData, catalog)

    result = stored.to_dict()
    result["scanTypes"] = [asdict(a) for a in compute_scan_type_aggregates(stored.idnData, catalog)]
    result["biologicalInflammationGroupNames"] = matched.groupNames
    result["biologicalInflammations"] = matched.inflammations
    return result


def reset_processed_data():
    """Clear all processed client data (for demo reset and tests)."""
    processed_client_data.clear()
