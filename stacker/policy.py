from stacker.core import overlap


def policy(env, threshold=0.9):
    # Strategy: wait while the sliding block is still mostly beside the top
    # of the tower and drop as soon as enough of it would survive the cut.
    # The first block has nothing under it, so drop once it is fully on the canvas.
    state = env.state
    moving = state.moving
    if moving is None or not state.running:
        return 0

    last = state.top
    if last is None:
        return 1 if moving.x >= 0 and moving.right <= state.config.canvas_width else 0

    _, width = overlap(moving, last)
    return 1 if width >= threshold * moving.width else 0
