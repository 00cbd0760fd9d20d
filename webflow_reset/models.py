from pydantic import BaseModel, Field, ConfigDict
from typing import Any, Dict, List, Optional

class Site(BaseModel):
    """Webflow site (read-only reference data)"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    short_name: str = Field(alias="shortName")
    name: str = ""

class Collection(BaseModel):
    """Webflow CMS collection"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    name: str = ""
    slug: Optional[str] = None

class Record(BaseModel):
    """
    One CMS item together with the collection it was fetched from.

    `fields` is the raw item payload as returned by Webflow (including
    `_id`, `_cid`, `published-on`, ...). Only `fields` may change after
    the record was fetched.
    """
    collection_id: str = Field(frozen=True)
    item_id: str = Field(frozen=True)
    fields: Dict[str, Any] = Field(default_factory=dict)


class Page(BaseModel):
    """One page of a paginated item listing"""
    model_config = ConfigDict(extra="ignore")

    items: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0
    total: int = 0
    offset: int = 0
    limit: int = 0

class PublishResponse(BaseModel):
    """Response of the publish site endpoint"""
    model_config = ConfigDict(extra="ignore")

    queued: bool = False

class DeleteResponse(BaseModel):
    """Response of the delete item / delete webhook endpoints"""
    model_config = ConfigDict(extra="ignore")

    deleted: int = 0

class Webhook(BaseModel):
    """Webhook registered on a site"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    trigger_type: Optional[str] = Field(default=None, alias="triggerType")
    url: Optional[str] = None

class RateLimitStatus(BaseModel):
    """Remaining request quota as reported by Webflow response headers"""
    limit: Optional[int] = None
    remaining: Optional[int] = None
