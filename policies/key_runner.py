from bug_arena import constants as C
from bug_arena.items import ItemKind


# Action ids for the first action component, ordered horizontal first.
STEPS = (
    (4, C.X_STEP, 0),   # right
    (3, -C.X_STEP, 0),  # left
    (2, 0, C.Y_STEP),   # down
    (1, 0, -C.Y_STEP),  # up
)


def policy(env):
    # Strategy: walk to the key, then to the door. Take the first step (horizontal
    # before vertical) that shortens the Manhattan distance to the goal and lands
    # on a cell the player may enter that is not water. Ignores enemies entirely.
    world = env.world
    if world is None or not world.running or world.state.paused:
        return [0, 0, 0]

    player, level_map = world.player, world.map
    goal = (level_map.end.x, level_map.end.y)
    if not player.has_key:
        keys = [item.cell for item in world.items if item.kind is ItemKind.KEY]
        if keys:
            goal = keys[0]

    dx = goal[0] - player.x
    dy = goal[1] - player.y
    for action, step_x, step_y in STEPS:
        if step_x * dx <= 0 and step_y * dy <= 0:
            continue
        x, y = player.x + step_x, player.y + step_y
        tile = level_map.tile_at(x, y)
        if tile is None or tile.lethal:
            continue
        if player.can_enter(x, y, level_map):
            return [action, 0, 0]
    return [0, 0, 0]
