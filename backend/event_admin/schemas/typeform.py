"""
Pydantic schemas for an event's `typeform_config` column.

The config is an ordered JSON array of field descriptors. Each descriptor
explains how one key of a registration's `details` mapping is labelled and
rendered in the admin panel. Keys use the camelCase names of the stored JSON.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, model_validator

DEFAULT_BUCKET_NAME = "registrations"

# Known field types. Any other string is accepted as an extension type.
FIELD_TYPES = frozenset({
    "text",
    "email",
    "number",
    "select",
    "multiselect",
    "textarea",
    "file_upload",
    "file",
    "team_members",
    "date",
    "url",
})

FILE_FIELD_TYPES = frozenset({"file_upload", "file"})


class TypeformFieldConfig(BaseModel):
    # Unknown keys are kept so the operator's JSON is stored as written
    model_config = ConfigDict(extra="allow")

    id: str = Field(..., min_length=1)
    label: str = Field(..., min_length=1)
    type: Optional[str] = None
    hidden: Optional[bool] = None
    isTeamName: Optional[bool] = None
    isTeamMembers: Optional[bool] = None
    required: Optional[bool] = None
    options: Optional[list[str]] = None
    bucketName: Optional[str] = None

    @property
    def is_file_field(self) -> bool:
        return self.type in FILE_FIELD_TYPES

    def resolved_bucket_name(self, default: str = DEFAULT_BUCKET_NAME) -> str:
        """Storage bucket used to build download URLs for file uploads."""
        return self.bucketName or default


class TypeformConfig(RootModel[list[TypeformFieldConfig]]):
    """
    Ordered list of field descriptors.

    Descriptor ids map registration detail keys to labels, so they must be
    unique within one config.
    """

    @model_validator(mode="after")
    def check_unique_ids(self) -> "TypeformConfig":
        seen = set()
        duplicates = []
        for field in self.root:
            if field.id in seen and field.id not in duplicates:
                duplicates.append(field.id)
            seen.add(field.id)
        if duplicates:
            raise ValueError(f"Duplicate field ids in typeform_config: {', '.join(duplicates)}")
        return self

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def as_json(self) -> list[dict]:
        """Descriptors as stored: only the keys the operator provided."""
        return [field.model_dump(exclude_unset=True) for field in self.root]


class TypeformFieldView(BaseModel):
    """Descriptor as returned to the admin panel, with the bucket resolved."""

    id: str
    label: str
    type: Optional[str] = None
    hidden: bool = False
    isTeamName: bool = False
    isTeamMembers: bool = False
    required: bool = False
    options: list[str] = Field(default_factory=list)
    bucketName: str
    isFileField: bool

    @classmethod
    def from_config(cls, field: TypeformFieldConfig, default_bucket: str = DEFAULT_BUCKET_NAME) -> "TypeformFieldView":
        return cls(
            id=field.id,
            label=field.label,
            type=field.type,
            hidden=bool(field.hidden),
            isTeamName=bool(field.isTeamName),
            isTeamMembers=bool(field.isTeamMembers),
            required=bool(field.required),
            options=field.options or [],
            bucketName=field.resolved_bucket_name(default_bucket),
            isFileField=field.is_file_field,
        )
