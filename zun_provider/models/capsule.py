"""Capsule-side models mirroring the Zun capsule API payloads."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CapsuleAddress(BaseModel):
    model_config = ConfigDict(extra="ignore")

    addr: str
    version: int = 4
    port: Optional[str] = None
    subnet_id: Optional[str] = None


class CapsuleContainer(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uuid: str = ""
    name: str = ""
    image: str = ""
    command: Optional[str] = None
    status: str = "Unknown"
    status_detail: Optional[str] = None
    status_reason: Optional[str] = None
    cpu: Optional[float] = None
    memory: Optional[str] = None
    container_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("command", mode="before")
    @classmethod
    def join_command(cls, value: Union[str, List[str], None]) -> Optional[str]:
        # Newer Zun releases report the command as an argv list
        if isinstance(value, list):
            return " ".join(str(part) for part in value)
        return value

    @field_validator("memory", mode="before")
    @classmethod
    def stringify_memory(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        return str(value)


class Capsule(BaseModel):
    model_config = ConfigDict(extra="ignore")

    uuid: str = ""
    meta_name: str = ""
    meta_labels: Dict[str, str] = Field(default_factory=dict)
    status: str = "Unknown"
    status_reason: Optional[str] = None
    restart_policy: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    addresses: Dict[str, List[CapsuleAddress]] = Field(default_factory=dict)
    containers: List[CapsuleContainer] = Field(default_factory=list)

    @field_validator("meta_labels", "addresses", mode="before")
    @classmethod
    def default_empty_mapping(cls, value: Any) -> Any:
        return value or {}


class CapsuleContainerTemplate(BaseModel):
    """One entry of ``spec.containers`` in a capsule template."""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    image: str
    command: List[str] = Field(default_factory=list)
    work_dir: Optional[str] = Field(default=None, alias="workDir")
    image_pull_policy: Optional[str] = Field(default=None, alias="imagePullPolicy")
    env: Dict[str, str] = Field(default_factory=dict)
    resources: Dict[str, Dict[str, Union[int, float]]] = Field(default_factory=dict)


class CapsuleTemplate(BaseModel):
    """Capsule creation request body sent as ``template`` to Zun."""
    model_config = ConfigDict(populate_by_name=True)

    capsule_version: str = Field(default="beta", alias="capsuleVersion")
    kind: str = "capsule"
    restart_policy: str = Field(default="Always", alias="restartPolicy")
    metadata: Dict[str, Any] = Field(default_factory=dict)
    containers: List[CapsuleContainerTemplate] = Field(default_factory=list)

    @property
    def name(self) -> str:
        return self.metadata.get("name", "")

    @property
    def labels(self) -> Dict[str, str]:
        return self.metadata.get("labels", {})

    def to_request(self) -> Dict[str, Any]:
        """Render the document in the layout the capsule API expects."""
        containers = [
            c.model_dump(by_alias=True, exclude_none=True) for c in self.containers
        ]
        return {
            "capsuleVersion": self.capsule_version,
            "kind": self.kind,
            "metadata": self.metadata,
            "restartPolicy": self.restart_policy,
            "spec": {"containers": containers},
        }
