# api/schemas/hooks.py
from typing import List
from pydantic import BaseModel

class SubscriptionSchema(BaseModel):
    hook: str
    callback: str
    priority: int
    accepted_args: int
    kind: str

class SubscriptionList(BaseModel):
    plugin: str
    version: str
    items: List[SubscriptionSchema]
