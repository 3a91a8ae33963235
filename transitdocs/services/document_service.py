"""
Document Service - creation, upload and patching of documents.

Every successful creation bumps the ``documents_processed`` stat in the same
store transaction as the insert, so the counter never drifts from the
number of documents created through this service.

Usage:
    from transitdocs.services import document_service

    doc = document_service.create_document(store, stats, payload)
    result = document_service.upload_document(store, stats, classifier, "invoice.pdf", data)
"""

import logging

from transitdocs.core.exceptions import NotFoundError, ValidationError
from transitdocs.models.schemas import DocumentPatch, clean_document_payload
from transitdocs.services.stats_service import DOCUMENTS_PROCESSED

logger = logging.getLogger(__name__)

MAX_FILENAME_LENGTH = 255


def create_document(store, stats, data: dict):
    """Validate ``data``, insert the document and count it.

    Raises:
        ValidationError: malformed payload (nothing is written).
    """
    payload = clean_document_payload(data)
    with store.transaction() as session:
        doc = store.create("documents", payload, session=session)
        stats.bump(DOCUMENTS_PROCESSED, session=session)
    logger.info("Document created id=%s type=%s", doc.id, doc.type)
    return doc


def upload_document(store, stats, classifier, filename: str, content: bytes) -> dict:
    """Classify an uploaded file and store it as a new document.

    Returns:
        {"document": Document, "processing": {classification, summary, department}}
    """
    filename = (filename or "").strip()
    if not filename:
        raise ValidationError("Invalid upload", details={"file": "A named file is required."})
    if len(filename) > MAX_FILENAME_LENGTH:
        raise ValidationError(
            "Invalid upload",
            details={"file": f"File name must be <= {MAX_FILENAME_LENGTH} characters."},
        )

    result = classifier.classify(filename, content)
    logger.debug("Classifier %s: %r -> %s", classifier.name, filename, result.type)

    doc = create_document(store, stats, {
        "title": f"{result.classification} - {filename}",
        "department": result.department,
        "type": result.type,
        "summary": result.summary,
        "content": f"Uploaded file: {filename} ({len(content)} bytes)",
        "status": "active",
    })
    return {"document": doc, "processing": result.processing_info()}


def update_document(store, doc_id: str, data: dict):
    """Patch a document's status/content.

    Raises:
        ValidationError: unknown/immutable fields or bad values.
        NotFoundError: ``doc_id`` does not exist.
    """
    patch = DocumentPatch.from_payload(data)
    doc = store.update("documents", doc_id, patch)
    if doc is None:
        raise NotFoundError(resource="Document", resource_id=doc_id)
    return doc
