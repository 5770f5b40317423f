"""
Workshop details kept under ``oilChangeApp_workshopInfo``.
"""
from typing import Optional

from pydantic import ValidationError

from repufrenos.log import get_logger
from repufrenos.schemas.tracker import WorkshopInfo
from repufrenos.storage import ClientStore
from repufrenos.tracker.vehicles import STORAGE_PREFIX

logger = get_logger(__name__)

WORKSHOP_INFO_KEY = STORAGE_PREFIX + "workshopInfo"


class WorkshopInfoRepository:

    def __init__(self, store: ClientStore):
        self.store = store

    def get(self) -> Optional[WorkshopInfo]:
        raw = self.store.get_json(WORKSHOP_INFO_KEY, None)
        if not raw:
            return None
        try:
            return WorkshopInfo.model_validate(raw)
        except ValidationError:
            logger.error("Stored workshop info is unreadable")
            return None

    def save(self, info: WorkshopInfo) -> WorkshopInfo:
        self.store.set_json(WORKSHOP_INFO_KEY, info.model_dump(by_alias=True))
        logger.info("Información del taller guardada")
        return info
