"""
QR Service - maintenance job card lookups and the scan simulator.

``get_by_code`` returns ``None`` when no job card carries the code; when
several do, the earliest created wins.
"""

import logging
import random

from transitdocs.core.exceptions import NotFoundError

logger = logging.getLogger(__name__)


def get_by_code(store, code: str):
    return store.find_first("qr_codes", code=code)


def simulate_scan(store, rng: random.Random | None = None) -> dict:
    """Pretend the camera read one of the known job cards.

    Raises:
        NotFoundError: no QR codes exist.
    """
    codes = store.list("qr_codes")
    if not codes:
        raise NotFoundError(resource="QR code")
    qr = (rng or random).choice(codes)
    logger.debug("Simulated scan picked %s", qr.code)
    return {
        "document_id": qr.code,
        "title": qr.title,
        "equipment": qr.equipment,
        "status": qr.status,
        "description": qr.description,
    }
