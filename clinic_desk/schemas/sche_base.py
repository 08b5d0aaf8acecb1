from typing import Optional, TypeVar, Generic

from pydantic import AliasGenerator, BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ResponseSchemaBase(BaseModel):
    success: bool = True
    code: str = '200'
    message: str = ''

    def custom_response(self, success: bool, message: str, code: str = '200'):
        self.success = success
        self.message = message
        self.code = code
        return self

    def success_response(self):
        self.success = True
        self.message = 'Success'
        return self


class DataResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str = ''
    data: Optional[T] = None

    model_config = ConfigDict(arbitrary_types_allowed=True)

    def custom_response(self, success: bool, message: str, data: T):
        self.success = success
        self.message = message
        self.data = data
        return self

    def success_response(self, data: T):
        self.success = True
        self.message = 'Success'
        self.data = data
        return self


class MetadataSchema(BaseModel):
    current_page: int
    page_size: int
    total_items: int
    total_pages: int = 1


class ClinicRecord(BaseModel):
    """Record read from the clinic backend, which speaks camelCase."""

    model_config = ConfigDict(
        alias_generator=AliasGenerator(validation_alias=to_camel),
        populate_by_name=True,
        from_attributes=True,
        extra='ignore',
    )


class ClinicPayload(BaseModel):
    """Body sent to the clinic backend."""

    model_config = ConfigDict(alias_generator=AliasGenerator(serialization_alias=to_camel), populate_by_name=True)

    def to_clinic(self) -> dict:
        return self.model_dump(by_alias=True, mode='json')
