from pydantic import BaseModel, ConfigDict
from typing import List, Optional


class Branch(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: Optional[str] = None
    name: str


class Menu(BaseModel):
    menu_id: str
    menu_name: str
    path: str


class Role(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    menus: List[Menu] = []
    role_access: List[str] = []
