"""Client and server messages.

Inbound frames are JSON objects whose ``type`` field selects the variant.
They are parsed and validated here, before anything reaches the engine.
"""

import json
from typing import Annotated, Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from unoroom.engine.card import Color
from unoroom.engine.errors import MalformedMessageError


class _ClientMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class JoinMessage(_ClientMessage):
    type: Literal["join"] = "join"
    name: str = Field(..., min_length=1, max_length=32)


class ReadyMessage(_ClientMessage):
    type: Literal["ready"] = "ready"


class StartGameMessage(_ClientMessage):
    type: Literal["startGame"] = "startGame"


class EndGameMessage(_ClientMessage):
    type: Literal["endGame"] = "endGame"


class RestartGameMessage(_ClientMessage):
    type: Literal["restartGame"] = "restartGame"


class PlayCardMessage(_ClientMessage):
    type: Literal["playCard"] = "playCard"
    card_id: str = Field(..., alias="cardId")
    chosen_color: Optional[Color] = Field(None, alias="chosenColor")


class DrawCardMessage(_ClientMessage):
    type: Literal["drawCard"] = "drawCard"


class PlayDrawnCardMessage(_ClientMessage):
    type: Literal["playDrawnCard"] = "playDrawnCard"
    card_id: str = Field(..., alias="cardId")
    chosen_color: Optional[Color] = Field(None, alias="chosenColor")


class KeepDrawnCardMessage(_ClientMessage):
    type: Literal["keepDrawnCard"] = "keepDrawnCard"


class CallUnoMessage(_ClientMessage):
    type: Literal["callUno"] = "callUno"


ClientMessage = Annotated[
    Union[
        JoinMessage,
        ReadyMessage,
        StartGameMessage,
        EndGameMessage,
        RestartGameMessage,
        PlayCardMessage,
        DrawCardMessage,
        PlayDrawnCardMessage,
        KeepDrawnCardMessage,
        CallUnoMessage,
    ],
    Field(discriminator="type"),
]

CLIENT_MESSAGE_TYPES = frozenset(
    {
        "join",
        "ready",
        "startGame",
        "endGame",
        "restartGame",
        "playCard",
        "drawCard",
        "playDrawnCard",
        "keepDrawnCard",
        "callUno",
    }
)

_client_adapter: TypeAdapter = TypeAdapter(ClientMessage)


def parse_client_message(raw: Union[str, bytes, Dict[str, Any]]) -> ClientMessage:
    """Parse one inbound frame into a client message model.

    Raises MalformedMessageError for invalid JSON, unknown types and
    missing or ill-typed fields.
    """
    if isinstance(raw, dict):
        data = raw
    else:
        try:
            data = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError):
            raise MalformedMessageError("Invalid message format") from None
    if not isinstance(data, dict):
        raise MalformedMessageError("Invalid message format")
    if data.get("type") not in CLIENT_MESSAGE_TYPES:
        raise MalformedMessageError("Unknown message type")
    try:
        return _client_adapter.validate_python(data)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(loc) for loc in first["loc"][1:]) or "message"
        raise MalformedMessageError(f"Invalid {data['type']} message: {field} {first['msg']}") from None


class StateMessage(BaseModel):
    type: Literal["state"] = "state"
    state: Dict[str, Any]


class ErrorMessage(BaseModel):
    type: Literal["error"] = "error"
    message: str
    code: Optional[str] = None


class DrawnCardMessage(BaseModel):
    type: Literal["drawnCard"] = "drawnCard"
    card: Dict[str, Any]


ServerMessage = Union[StateMessage, ErrorMessage, DrawnCardMessage]


def encode_server_message(message: ServerMessage) -> str:
    return message.model_dump_json()
