from typing import List, Optional, Union
from pydantic import BaseModel, Field, field_validator

from gamenight.utils.names import unique_names


class GameDTO(BaseModel):
    """
    A game in the catalog.
    `owners` holds the players who own it, in the order they were added.
    """
    id: str
    name: str
    capacity: int = Field(..., ge=1)
    owners: List[str] = Field(default_factory=list)
    full_party_only: bool = False
    remote_play_enabled: bool = False


class PlayableGameDTO(GameDTO):
    """
    A game the requested group can play, plus which of the requested
    players own it.
    """
    matched_owners: List[str] = Field(default_factory=list)


class CreateGameRequest(BaseModel):
    """
    Input DTO for adding a game.
    Owners may be sent as a list or as a comma-separated string.
    """
    name: str = Field(..., min_length=1, description="Display name of the game.")
    capacity: int = Field(..., ge=1, description="Maximum number of simultaneous players.")
    owners: Union[List[str], str] = Field(
        default_factory=list, description="Players who own the game."
    )
    full_party_only: bool = Field(
        False, description="Only propose the game when the group fills every seat."
    )
    remote_play_enabled: bool = Field(
        False, description="One owner in the group is enough to play."
    )

    @field_validator("owners")
    @classmethod
    def _split_owners(cls, value):
        return unique_names(value)


class UpdateGameRequest(BaseModel):
    """
    Input DTO for editing a game. Only the fields that are sent are changed.
    """
    name: Optional[str] = Field(None, min_length=1)
    capacity: Optional[int] = Field(None, ge=1)
    owners: Optional[Union[List[str], str]] = None
    full_party_only: Optional[bool] = None
    remote_play_enabled: Optional[bool] = None

    @field_validator("owners")
    @classmethod
    def _split_owners(cls, value):
        if value is None:
            return None
        return unique_names(value)

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True, exclude_none=True)


class OwnerRequest(BaseModel):
    gamer_name: str = Field(..., min_length=1, description="Name of the player.")


class GameListResponse(BaseModel):
    items: List[GameDTO]


class PlayableGamesResponse(BaseModel):
    """
    Output DTO for the playable-games query.
    `players` echoes the normalized group the query was evaluated for.
    """
    players: List[str]
    items: List[PlayableGameDTO]


class GamersResponse(BaseModel):
    gamers: List[str]
