"""Settings endpoints"""
import logging

from fastapi import APIRouter, Depends, Response

from focushero.infra.memory import SettingsStore, get_settings_store
from focushero.models.settings import Settings, SettingsUpdate
from focushero.services.stats import export_settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/settings", tags=["settings"])


@router.get("", response_model=Settings)
async def get_settings(store: SettingsStore = Depends(get_settings_store)):
    """Get the settings record"""
    return await store.get()


@router.put("", response_model=Settings)
async def update_settings(
    request: SettingsUpdate,
    store: SettingsStore = Depends(get_settings_store),
):
    """Merge the provided fields into the settings record"""
    settings = await store.update(request)
    logger.info(f"Settings updated: {sorted(request.model_dump(exclude_unset=True))}")
    return settings


@router.get("/export")
async def export_settings_file(store: SettingsStore = Depends(get_settings_store)):
    """Download the settings record as a JSON file"""
    settings = await store.get()
    return Response(
        content=export_settings(settings),
        media_type="application/json",
        headers={"Content-Disposition": 'attachment; filename="focushero-settings.json"'},
    )
