# utils/schema.py
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict

class Question(BaseModel):
    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: Optional[str] = None
    name: Optional[str] = None
    value: Any = None

    def summary(self, with_value: bool = False) -> Dict[str, Any]:
        out = {"id": self.id, "name": self.name}
        if with_value:
            out["value"] = self.value
        return out

class UpdateDetails(BaseModel):
    companyId: str
    entryId: str
    updatedFields: List[str]
    values: Dict[str, Any]
    dryRun: Optional[bool] = None

class RelayResult(BaseModel):
    success: bool = True
    message: str
    details: UpdateDetails
