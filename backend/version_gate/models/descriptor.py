from __future__ import annotations

from pydantic import AnyUrl, BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError

from version_gate.models.errors import DecodeError


class VersionDescriptor(BaseModel):
    """Remote payload describing the recommended/required app versions.

    Wire keys are snake_case; ``eol`` maps to ``end_of_life``. ``update_url``
    must be an absolute URL with a scheme, otherwise validation fails and no
    descriptor is constructed.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    recommended_version: StrictStr
    required_version: StrictStr
    update_url: AnyUrl
    end_of_life: StrictBool = Field(alias='eol')
    message: StrictStr | None = None

    @classmethod
    def from_json(cls, data: bytes | str) -> 'VersionDescriptor':
        try:
            return cls.model_validate_json(data)
        except ValidationError as exc:
            raise DecodeError(f'invalid version descriptor: {exc.error_count()} error(s); {exc.errors()[0]["msg"]}') from exc

    def to_wire(self) -> dict:
        return self.model_dump(mode='json', by_alias=True)
