import random

from esper import World

from tilematch.components.game_config import GameConfig
from tilematch.components.grid import Grid
from tilematch.components.selection import Selection
from tilematch.components.session_state import SessionState


def create_world(
    config: GameConfig | None = None,
    *,
    rng: random.Random | None = None,
) -> World:
    """Build the world holding one session: a state entity and a board entity.

    The grid starts empty; GameSession fills it when it starts.
    """
    world = World()
    setattr(world, "random", rng or random.Random())
    config = config or GameConfig()

    world.create_entity(
        config,
        SessionState(match_limit=config.match_limit),
        Selection(),
    )
    world.create_entity(Grid(config.grid_size, rng=world.random))
    return world


def get_game_config(world: World) -> GameConfig:
    for _, config in world.get_component(GameConfig):
        return config
    raise RuntimeError("GameConfig not found")


def get_session_state(world: World) -> SessionState:
    for _, state in world.get_component(SessionState):
        return state
    raise RuntimeError("SessionState not found")


def get_selection(world: World) -> Selection:
    for _, selection in world.get_component(Selection):
        return selection
    raise RuntimeError("Selection not found")


def get_grid(world: World) -> Grid:
    for _, grid in world.get_component(Grid):
        return grid
    raise RuntimeError("Grid not found")
