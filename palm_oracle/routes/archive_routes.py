"""Archive of past readings."""

from functools import lru_cache
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..config import load_settings
from ..models import ArchiveCreate, ArchiveEntry
from ..readings_storage.archive_db import ReadingArchive, SqliteReadingArchive

router = APIRouter(prefix="/api/archive", tags=["archive"])


@lru_cache(maxsize=None)
def archive_for(db_path: str) -> SqliteReadingArchive:
    """One archive per database path; the schema is created on first use."""
    return SqliteReadingArchive(db_path)


def get_archive() -> ReadingArchive:
    return archive_for(load_settings().db_path)


@router.get("", response_model=List[ArchiveEntry])
def list_archive(archive: ReadingArchive = Depends(get_archive)) -> List[ArchiveEntry]:
    """All saved readings, newest first."""
    return archive.load()


@router.post("", response_model=ArchiveEntry, status_code=201)
def save_to_archive(req: ArchiveCreate, archive: ReadingArchive = Depends(get_archive)) -> ArchiveEntry:
    try:
        return archive.append(req)
    except ValueError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.get("/{entry_id}", response_model=ArchiveEntry)
def get_archived(entry_id: str, archive: ReadingArchive = Depends(get_archive)) -> ArchiveEntry:
    entry = archive.get(entry_id)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"Archive entry not found: {entry_id}")
    return entry


@router.delete("/{entry_id}")
def delete_archived(entry_id: str, archive: ReadingArchive = Depends(get_archive)):
    if not archive.delete(entry_id):
        raise HTTPException(status_code=404, detail=f"Archive entry not found: {entry_id}")
    return {"ok": True}
