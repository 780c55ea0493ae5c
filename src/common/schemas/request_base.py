# File: common/schemas/request_base.py

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseRequestModel(BaseModel):
    """
    Base model for all API request bodies.
    Fields are snake_case in Python and camelCase on the wire and in the store.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",  # Reject extra fields
        str_strip_whitespace=True,
    )

    def to_document(self, partial: bool = False) -> Dict[str, Any]:
        """
        Dump the request as a store document (camelCase keys).

        Args:
            partial (bool): Only keep the fields the client actually sent (PATCH semantics).
        """
        if partial:
            return self.model_dump(by_alias=True, exclude_unset=True, mode="json")
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
