import threading
import uuid
from collections import Counter
from concurrent.futures import ThreadPoolExecutor

import pytest

from common_sense.core.errors import NotFoundError
from common_sense.models.match_db import match_crud
from common_sense.models.match_db.match_crud import (
    attempt_match,
    end_match,
    get_active_match,
    is_active_match_member,
)
from common_sense.models.match_db.match_db import ActiveMatchMember, Match
from common_sense.models.orientation_db.orientation_crud import submit_responses
from common_sense.services.match_status import MatchStatus


def _active_matches(db):
    db.expire_all()
    return db.query(Match).filter(Match.status == MatchStatus.active.value).all()


def test_distant_members_are_matched_and_repeat_attempts_are_idempotent(db, scored_member):
    a = scored_member(3.0)
    b = scored_member(7.0)

    match_id = attempt_match(db, a.id, 3.0)

    assert match_id is not None
    match = get_active_match(db, a.id)
    assert match.id == match_id
    assert match.partner.id == b.id
    assert match.orientation_gap == pytest.approx(4.0)

    assert attempt_match(db, a.id, 3.0) == match_id
    assert attempt_match(db, b.id, 7.0) == match_id
    assert len(_active_matches(db)) == 1


def test_candidate_below_threshold_is_rejected(db, scored_member):
    a = scored_member(5.0)
    scored_member(5.2)

    assert attempt_match(db, a.id, 5.0) is None
    assert db.query(Match).count() == 0


def test_threshold_is_configurable(db, scored_member):
    a = scored_member(3.0)
    scored_member(7.0)

    assert attempt_match(db, a.id, 3.0, min_gap=5.0) is None
    assert attempt_match(db, a.id, 3.0, min_gap=4.0) is not None


def test_no_candidates_means_no_match(db, scored_member, make_member):
    a = scored_member(1.0)
    make_member()  # never answered, so has no score

    assert attempt_match(db, a.id, 1.0) is None


def test_nearest_candidate_is_chosen(db, scored_member):
    a = scored_member(0.0)
    near = scored_member(2.0)
    scored_member(6.0)
    scored_member(-9.0)

    attempt_match(db, a.id, 0.0)

    assert get_active_match(db, a.id).partner.id == near.id


def test_nearest_candidate_is_rejected_even_when_a_farther_one_exists(db, scored_member):
    a = scored_member(0.0)
    scored_member(0.3)
    scored_member(8.0)

    assert attempt_match(db, a.id, 0.0) is None


def test_ties_are_broken_by_member_id(db, scored_member):
    a = scored_member(0.0)
    left = scored_member(-2.0)
    right = scored_member(2.0)
    expected = min((left, right), key=lambda member: member.id.hex)

    attempt_match(db, a.id, 0.0)

    assert get_active_match(db, a.id).partner.id == expected.id


def test_matched_members_are_not_candidates(db, scored_member):
    a = scored_member(0.0)
    b = scored_member(1.0)
    c = scored_member(9.0)
    attempt_match(db, a.id, 0.0)

    d = scored_member(1.5)
    attempt_match(db, d.id, 1.5)

    assert get_active_match(db, d.id).partner.id == c.id
    assert get_active_match(db, b.id).partner.id == a.id


def test_orientation_gap_is_none_without_both_scores(db, make_member):
    a = make_member()
    b = make_member()
    match_id = uuid.uuid4()
    db.add(Match(id=match_id, member_a_id=a.id, member_b_id=b.id, status="active"))
    db.commit()

    match = get_active_match(db, a.id)

    assert match.id == match_id
    assert match.orientation_gap is None


def test_get_active_match_for_unmatched_member(db, scored_member):
    a = scored_member(1.0)

    assert get_active_match(db, a.id) is None


def test_active_match_member_guard(db, scored_member, make_member):
    a = scored_member(-4.0)
    b = scored_member(4.0)
    outsider = make_member()
    match_id = attempt_match(db, a.id, -4.0)

    assert is_active_match_member(db, match_id, a.id)
    assert is_active_match_member(db, match_id, b.id)
    assert not is_active_match_member(db, match_id, outsider.id)
    assert not is_active_match_member(db, uuid.uuid4(), a.id)


def test_ending_a_match_releases_both_members(db, scored_member):
    a = scored_member(-4.0)
    b = scored_member(4.0)
    match_id = attempt_match(db, a.id, -4.0)

    end_match(db, match_id)

    assert not is_active_match_member(db, match_id, a.id)
    assert get_active_match(db, a.id) is None
    assert db.query(ActiveMatchMember).count() == 0
    assert db.get(Match, match_id).status == MatchStatus.ended.value

    again = attempt_match(db, b.id, 4.0)
    assert again is not None and again != match_id


def test_ending_an_unknown_match(db):
    with pytest.raises(NotFoundError):
        end_match(db, uuid.uuid4())


def test_score_resubmission_feeds_matching(db, scored_member):
    a = scored_member(5.0)
    scored_member(5.2)
    assert attempt_match(db, a.id, 5.0) is None

    score = submit_responses(db, a.id, [("climate-regulation", -5.0)])

    assert score == pytest.approx(0.0)
    assert attempt_match(db, a.id, score) is not None


def test_losing_a_race_for_the_caller_returns_the_winning_match(db, database, scored_member, monkeypatch):
    a = scored_member(0.0)
    b = scored_member(3.0)
    scored_member(6.0)
    rival_id = uuid.uuid4()
    original = match_crud._nearest_candidate

    def racing_candidate(session, member_id, score):
        # another request pairs a with b between selection and insert
        with database.session() as other:
            other.add(Match(id=rival_id, member_a_id=b.id, member_b_id=a.id, status="active"))
            other.flush()
            other.add_all([
                ActiveMatchMember(member_id=a.id, match_id=rival_id),
                ActiveMatchMember(member_id=b.id, match_id=rival_id),
            ])
            other.commit()
        return original(session, member_id, score)

    monkeypatch.setattr(match_crud, "_nearest_candidate", racing_candidate)

    assert attempt_match(db, a.id, 0.0) == rival_id
    assert [m.id for m in _active_matches(db)] == [rival_id]


def test_losing_a_race_for_the_candidate_returns_no_match(db, scored_member, monkeypatch):
    a = scored_member(0.0)
    b = scored_member(5.0)
    c = scored_member(4.0)
    taken_id = attempt_match(db, b.id, 5.0)
    assert get_active_match(db, c.id).id == taken_id

    # stale selection: c already belongs to the b/c match
    monkeypatch.setattr(match_crud, "_nearest_candidate", lambda session, member_id, score: (c.id, 4.0))

    assert attempt_match(db, a.id, 0.0) is None
    assert [m.id for m in _active_matches(db)] == [taken_id]


def test_concurrent_attempts_never_double_book_a_member(database, db, scored_member):
    scores = [float(score) for score in range(-5, 5)]
    member_ids = [scored_member(score).id for score in scores]
    barrier = threading.Barrier(len(member_ids))

    def attempt(member_id, score):
        session = database.session()
        try:
            barrier.wait()
            return member_id, attempt_match(session, member_id, score)
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=len(member_ids)) as pool:
        results = list(pool.map(attempt, member_ids, scores))

    active = _active_matches(db)
    assert active

    seats = Counter()
    for match in active:
        seats[match.member_a_id] += 1
        seats[match.member_b_id] += 1
    assert all(count == 1 for count in seats.values())

    active_ids = {match.id for match in active}
    for member_id, match_id in results:
        if match_id is not None:
            assert match_id in active_ids
            match = db.get(Match, match_id)
            assert member_id in (match.member_a_id, match.member_b_id)

    slots = {slot.member_id: slot.match_id for slot in db.query(ActiveMatchMember).all()}
    assert set(slots) == set(seats)
