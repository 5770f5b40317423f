"""
Workshop info and tracker backup routes.
"""
from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status
from fastapi.responses import JSONResponse
from typing import Dict, Optional

from repufrenos.schemas.tracker import WorkshopInfo
from repufrenos.storage import ClientStore, get_store
from repufrenos.tracker import WorkshopInfoRepository
from repufrenos.tracker.backup import backup_filename, export_backup, import_backup

router = APIRouter(prefix="/workshop", tags=["workshop"])


@router.get("/", response_model=Optional[WorkshopInfo])
async def get_workshop_info(store: ClientStore = Depends(get_store)):
    """
    Workshop details, or null when they were never saved.
    """
    return WorkshopInfoRepository(store).get()


@router.put("/", response_model=WorkshopInfo)
async def save_workshop_info(info: WorkshopInfo, store: ClientStore = Depends(get_store)):
    """
    Save the workshop details used to sign WhatsApp messages.
    """
    return WorkshopInfoRepository(store).save(info)


@router.get("/export")
async def export_data(store: ClientStore = Depends(get_store)):
    """
    Download a backup of vehicles, service histories and workshop info.
    """
    return JSONResponse(
        content=export_backup(store),
        headers={"Content-Disposition": f'attachment; filename="{backup_filename()}"'},
    )


@router.post("/import", response_model=Dict[str, int])
async def import_data(file: UploadFile = File(...), store: ClientStore = Depends(get_store)):
    """
    Restore a backup. Replaces all existing tracker data.
    """
    content = await file.read()
    if not content:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No se pudo leer el archivo."
        )

    return import_backup(store, content)
