from typing import Optional
from fastapi import Query
from pydantic import BaseModel
from gtraf_admin.core.enums import SortDirection


class ViewParams(BaseModel):
    q: Optional[str] = None
    sort: Optional[str] = None
    direction: SortDirection = SortDirection.ASC


def view_params(
    q: Optional[str] = Query(None, description="Search over every column"),
    sort: Optional[str] = Query(None, description="Field to sort on"),
    direction: SortDirection = Query(SortDirection.ASC),
) -> ViewParams:
    return ViewParams(q=q, sort=sort, direction=direction)
