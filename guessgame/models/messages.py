"""Inbound client messages.

Every frame a client sends is a JSON object tagged by ``type``. The union
below is closed: anything that does not validate against one of its members
is rejected as malformed.
"""
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from ..errors import MalformedMessage


class InboundMessage(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CreateMessage(InboundMessage):
    type: Literal["create"]
    username: str


class JoinMessage(InboundMessage):
    type: Literal["join"]
    game_code: str
    username: str


class NumberMessage(InboundMessage):
    type: Literal["number"]
    number: float = Field(allow_inf_nan=False)
    game_code: str | None = None
    player_number: int | None = None


class TimeoutMessage(InboundMessage):
    type: Literal["timeout"]
    game_code: str | None = None


ClientMessage = Annotated[
    Union[CreateMessage, JoinMessage, NumberMessage, TimeoutMessage],
    Field(discriminator="type"),
]

_client_message_adapter = TypeAdapter(ClientMessage)


def parse_client_message(raw: str | bytes) -> ClientMessage:
    try:
        return _client_message_adapter.validate_json(raw)
    except ValidationError as e:
        raise MalformedMessage(f"Invalid message: {e.error_count()} error(s)") from e
