from __future__ import annotations

import pytest

from flappy.actor import Actor
from flappy.constants import GROUND_Y
from flappy.data_models import CollisionKind, ObstaclePair, Session
from flappy.difficulty import INITIAL_DIFFICULTY
from flappy.events import EventBus, EventRecorder, EventType
from flappy.scoring import CollisionResolver, ScoreTracker


@pytest.fixture()
def session() -> Session:
    actor = Actor()
    actor.reset()
    return Session(actor=actor, difficulty=INITIAL_DIFFICULTY)


def _pair(pair_id: str, right: float, gap_center_y: float = 300, gap_height: float = 150) -> ObstaclePair:
    return ObstaclePair(pair_id=pair_id, x=right - 80, gap_center_y=gap_center_y,
                        gap_height=gap_height, velocity_x=-150)


def _behind(session: Session) -> float:
    return session.actor.bounds.left - 1


def test_passing_a_pair_scores_exactly_once(session: Session, bus: EventBus, recorder: EventRecorder) -> None:
    tracker = ScoreTracker(bus)
    session.pairs.append(_pair("a", _behind(session)))

    assert tracker.check(session) == 1
    assert session.score == 1
    assert tracker.check(session) == 0
    assert tracker.check(session) == 0
    assert session.score == 1
    assert [e.data["pair_id"] for e in recorder.of_type(EventType.SCORE_CHANGED)] == ["a"]


def test_right_edge_must_be_strictly_behind(session: Session, bus: EventBus) -> None:
    tracker = ScoreTracker(bus)
    session.pairs.append(_pair("a", session.actor.bounds.left))
    assert tracker.check(session) == 0
    assert not session.pairs[0].scored


def test_scoring_one_pair_leaves_the_other_alone(session: Session, bus: EventBus) -> None:
    tracker = ScoreTracker(bus)
    a = _pair("a", _behind(session))
    b = _pair("b", session.actor.bounds.right + 200)
    session.pairs.extend([a, b])

    tracker.check(session)
    assert a.scored
    assert all(m.scored for m in a.members)
    assert not b.scored
    assert not any(m.scored for m in b.members)


def test_score_feeds_difficulty_hook(session: Session, bus: EventBus) -> None:
    seen = []
    tracker = ScoreTracker(bus, on_score=seen.append)
    session.pairs.extend([_pair("a", _behind(session)), _pair("b", _behind(session) - 300)])
    assert tracker.check(session) == 2
    assert seen == [1, 2]


def test_milestone_toggles_background(session: Session, bus: EventBus, recorder: EventRecorder) -> None:
    tracker = ScoreTracker(bus)
    session.score = 9
    session.pairs.append(_pair("a", _behind(session)))
    tracker.check(session)

    assert session.score == 10
    assert [e.data["score"] for e in recorder.of_type(EventType.SCORE_MILESTONE)] == [10]
    assert [e.data["is_day"] for e in recorder.of_type(EventType.BACKGROUND_CHANGED)] == [False]
    assert session.background_is_day is False


def test_soundtrack_level_rises_with_score(session: Session, bus: EventBus, recorder: EventRecorder) -> None:
    tracker = ScoreTracker(bus)
    session.soundtrack_level = 1
    session.score = 19
    session.pairs.append(_pair("a", _behind(session)))
    tracker.check(session)
    assert session.soundtrack_level == 2
    assert [e.data["level"] for e in recorder.of_type(EventType.SOUNDTRACK_CHANGED)] == [2]


def test_no_collision_inside_the_gap(session: Session) -> None:
    actor = session.actor
    pair = _pair("a", actor.x + 40, gap_center_y=actor.y)
    assert CollisionResolver().check(actor, [pair]) is None


def test_obstacle_collision(session: Session) -> None:
    actor = session.actor
    pair = _pair("a", actor.x + 40, gap_center_y=actor.y + 150)
    assert CollisionResolver().check(actor, [pair]) is CollisionKind.OBSTACLE


def test_ground_collision(session: Session) -> None:
    actor = session.actor
    actor.y = GROUND_Y - actor.height / 2
    assert CollisionResolver().check(actor, []) is CollisionKind.GROUND


def test_top_boundary_collision(session: Session) -> None:
    actor = session.actor
    actor.y = -1
    assert CollisionResolver().check(actor, []) is CollisionKind.TOP


def test_simultaneous_hits_resolve_to_one_collision(session: Session) -> None:
    actor = session.actor
    actor.y = GROUND_Y
    pair = _pair("a", actor.x + 40, gap_center_y=100, gap_height=100)
    assert CollisionResolver().check(actor, [pair]) is CollisionKind.GROUND


def test_pairs_level_with_the_bird_only(session: Session) -> None:
    actor = session.actor
    far = _pair("far", actor.bounds.right + 300, gap_center_y=100, gap_height=100)
    assert CollisionResolver().check(actor, [far]) is None
