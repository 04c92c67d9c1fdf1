"""
Playfield geometry for arena pong.

Functions here work on the values they are given and keep no state of their
own. The only randomness is the sign of the ball velocity on (re)serve, drawn
from the ``rng`` argument.
"""

from __future__ import annotations

import random
from typing import Iterable, Optional, Tuple

from .constants import (
    BALL_SIZE,
    BALL_SPEED,
    DIRECTION_DOWN,
    DIRECTION_LEFT,
    DIRECTION_RIGHT,
    DIRECTION_UP,
    FIELD_CENTER,
    FIELD_SIZE,
    HORIZONTAL_SIDES,
    PADDLE_LAYOUT,
    PADDLE_STEP,
    SCORING_SIDE,
    SIDE_BOTTOM,
    SIDE_LEFT,
    SIDE_RIGHT,
    SIDE_TOP,
    SPEED_UP_FACTOR,
)
from .models import Ball, Paddle


def serve_velocity(rng: random.Random) -> Tuple[int, int]:
    return rng.choice((-BALL_SPEED, BALL_SPEED)), rng.choice((-BALL_SPEED, BALL_SPEED))


def reset_ball(ball: Ball, rng: random.Random) -> None:
    ball.x = FIELD_CENTER
    ball.y = FIELD_CENTER
    ball.vx, ball.vy = serve_velocity(rng)


def build_paddle(player_id: str, side: str) -> Paddle:
    x, y, width, height = PADDLE_LAYOUT[side]
    return Paddle(player_id, side, x, y, width, height)


def move_paddle(paddle: Paddle, direction: str) -> bool:
    """Step a paddle along its own axis; returns False when the input is ignored."""
    if paddle.side in HORIZONTAL_SIDES:
        if direction == DIRECTION_LEFT:
            paddle.x = max(0, paddle.x - PADDLE_STEP)
        elif direction == DIRECTION_RIGHT:
            paddle.x = min(FIELD_SIZE - paddle.width, paddle.x + PADDLE_STEP)
        else:
            return False
    else:
        if direction == DIRECTION_UP:
            paddle.y = max(0, paddle.y - PADDLE_STEP)
        elif direction == DIRECTION_DOWN:
            paddle.y = min(FIELD_SIZE - paddle.height, paddle.y + PADDLE_STEP)
        else:
            return False
    return True


def collides(ball: Ball, paddle: Paddle) -> bool:
    # Touching edges do not count.
    return (
        ball.x < paddle.x + paddle.width
        and ball.x + BALL_SIZE > paddle.x
        and ball.y < paddle.y + paddle.height
        and ball.y + BALL_SIZE > paddle.y
    )


def bounce(ball: Ball, paddle: Paddle) -> None:
    if paddle.side in HORIZONTAL_SIDES:
        ball.vy = -ball.vy
    else:
        ball.vx = -ball.vx
    ball.vx *= SPEED_UP_FACTOR
    ball.vy *= SPEED_UP_FACTOR


def crossed_wall(ball: Ball) -> Optional[str]:
    """Return the wall the ball has left the playfield through, if any."""
    if ball.y < 0:
        return SIDE_TOP
    if ball.x > FIELD_SIZE:
        return SIDE_RIGHT
    if ball.y > FIELD_SIZE:
        return SIDE_BOTTOM
    if ball.x < 0:
        return SIDE_LEFT
    return None


def advance_ball(ball: Ball, paddles: Iterable[Paddle], rng: random.Random) -> Optional[str]:
    """Run one physics step.

    Moves the ball, bounces it off the first paddle it overlaps and, when it
    leaves the field, re-serves it from the centre. Returns the side whose
    guard earns the point, or None when nobody scored.
    """
    ball.x += ball.vx
    ball.y += ball.vy

    for paddle in paddles:
        if collides(ball, paddle):
            bounce(ball, paddle)
            break

    wall = crossed_wall(ball)
    if wall is None:
        return None
    reset_ball(ball, rng)
    return SCORING_SIDE[wall]
