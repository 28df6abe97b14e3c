"""Entity and direction models for Dragonlight."""

from enum import Enum
from uuid import uuid4

from pydantic import BaseModel, Field


class Direction(str, Enum):
    """The four facings an entity can have."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        """Unit (dx, dy) step for this direction. y grows downward."""
        return _DELTAS[self]


_DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class EntityType(str, Enum):
    """Kinds of things that can exist in the game."""
    FLASHLIGHT = "flashlight"
    BLOCK = "block"
    DRAGON = "dragon"
    FIREBALL = "fireball"
    FIRE = "fire"
    KEY = "key"


class KeyVisibility(str, Enum):
    """How much of a key the player can currently know about."""
    VISIBLE = "visible"
    INVISIBLE = "invisible"
    ILLUMINATED = "illuminated"


def _new_id() -> str:
    return str(uuid4())


class Entity(BaseModel):
    """Anything that lives on the board or in the entity registry."""
    id: str = Field(default_factory=_new_id)
    type: EntityType
    position: tuple[int, int]               # (x, y)
    direction: Direction | None = None


class Flashlight(Entity):
    """The player. Its facing is also the beam direction."""
    type: EntityType = EntityType.FLASHLIGHT
    direction: Direction = Direction.UP


class Block(Entity):
    type: EntityType = EntityType.BLOCK


class Dragon(Entity):
    type: EntityType = EntityType.DRAGON
    direction: Direction = Direction.DOWN


class Key(Entity):
    """A numbered key. Only collectible when it is the next in order."""
    type: EntityType = EntityType.KEY
    key_number: int
    visibility: KeyVisibility = KeyVisibility.VISIBLE


class Fireball(Entity):
    """A projectile in flight. Lives in the registry only, never on the board."""
    type: EntityType = EntityType.FIREBALL
    direction: Direction
    created_at: float
    moved_at: float                 # Last time the fireball advanced


class Fire(Entity):
    """A burning tile left where a fireball stopped."""
    type: EntityType = EntityType.FIRE
    created_at: float
    destroy_at: float
