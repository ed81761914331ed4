"""Lookup helpers shared by the routers"""
from fastapi import HTTPException
from typing import Optional


def get_or_404(item, resource_name: str, resource_id: Optional[str] = None):
    """Return ``item`` unchanged, or raise 404 when it is missing or falsy."""
    if item:
        return item
    detail = f"{resource_name} {resource_id} not found" if resource_id else f"{resource_name} not found"
    raise HTTPException(status_code=404, detail=detail)
