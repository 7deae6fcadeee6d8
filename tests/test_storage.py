"""Tests for the SQLAlchemy-backed stores."""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from knowyourself.core.exceptions import ValidationError
from knowyourself.database import Analysis as AnalysisRow
from knowyourself.database import FinalLearning as FinalLearningRow
from knowyourself.database import Reflection as ReflectionRow
from knowyourself.models.auth import ProfileUpdate

QUESTION_TWO = "Talk about a meaningful failure or challenge you've faced."
LONG_AGO = datetime(2020, 1, 1)


class TestReflectionStore:
    def test_get_missing_returns_none(self, reflection_store, user):
        assert reflection_store.get(user.id, 2) is None

    def test_upsert_then_get(self, reflection_store, user):
        reflection_store.upsert(user.id, 2, QUESTION_TWO, "I learned to be patient.")

        stored = reflection_store.get(user.id, 2)
        assert stored.user_response == "I learned to be patient."
        assert stored.question_text == QUESTION_TWO
        assert stored.question_id == 2
        assert stored.user_id == user.id

    def test_upsert_is_idempotent_on_key(self, reflection_store, user, db):
        first = reflection_store.upsert(user.id, 2, QUESTION_TWO, "draft")
        with db.get_session() as session:
            session.get(ReflectionRow, first.id).updated_at = LONG_AGO

        second = reflection_store.upsert(user.id, 2, QUESTION_TWO, "final answer")

        assert second.id == first.id
        assert second.user_response == "final answer"
        assert second.updated_at > LONG_AGO

        with db.get_session() as session:
            count = (
                session.query(ReflectionRow)
                .filter(ReflectionRow.user_id == user.id, ReflectionRow.question_id == 2)
                .count()
            )
        assert count == 1

    def test_question_text_snapshot_kept_on_update(self, reflection_store, user):
        reflection_store.upsert(user.id, 2, QUESTION_TWO, "one")
        updated = reflection_store.upsert(user.id, 2, "different wording", "two")
        assert updated.question_text == QUESTION_TWO

    def test_list_is_ordered_by_question(self, reflection_store, user):
        for question_id in (5, 1, 3):
            reflection_store.upsert(user.id, question_id, f"Q{question_id}", f"answer {question_id}")

        assert [r.question_id for r in reflection_store.list(user.id)] == [1, 3, 5]

    def test_blank_responses_stored_as_is(self, reflection_store, user):
        stored = reflection_store.upsert(user.id, 4, "Q4", "   ")
        assert stored.user_response == "   "

    def test_users_do_not_see_each_other(self, reflection_store, user_store, user):
        other = user_store.create("sky", "another-password")
        reflection_store.upsert(user.id, 1, "Q1", "mine")

        assert reflection_store.list(other.id) == []
        assert reflection_store.get(other.id, 1) is None


class TestAnalysisStore:
    def test_get_missing_returns_none(self, analysis_store, user):
        assert analysis_store.get(user.id) is None

    def test_replace_keeps_only_latest(self, analysis_store, user):
        analysis_store.replace(user.id, ["first"])
        latest = analysis_store.replace(user.id, ["second", "third"])

        assert analysis_store.count(user.id) == 1
        stored = analysis_store.get(user.id)
        assert stored.id == latest.id
        assert stored.self_discoveries == ["second", "third"]

    def test_database_allows_one_row_per_user(self, analysis_store, user, db):
        analysis_store.replace(user.id, ["first"])

        with pytest.raises(IntegrityError):
            with db.get_session() as session:
                session.add(AnalysisRow(user_id=user.id, self_discoveries=["second"]))

        assert analysis_store.get(user.id).self_discoveries == ["first"]

    def test_discovery_order_preserved(self, analysis_store, user):
        discoveries = [f"**Insight {i}:** text" for i in range(7)]
        assert analysis_store.replace(user.id, discoveries).self_discoveries == discoveries


class TestFinalLearningStore:
    def test_upsert_twice_keeps_latest(self, final_learning_store, user, db):
        first = final_learning_store.upsert(user.id, "I am more patient than I thought.")
        with db.get_session() as session:
            session.get(FinalLearningRow, first.id).submitted_at = LONG_AGO

        second = final_learning_store.upsert(user.id, "I value honesty above comfort.")

        stored = final_learning_store.get(user.id)
        assert stored.id == first.id
        assert stored.self_written_learnings == "I value honesty above comfort."
        assert second.submitted_at > LONG_AGO
        assert stored.submitted_at == second.submitted_at

    def test_get_missing_returns_none(self, final_learning_store, user):
        assert final_learning_store.get(user.id) is None


class TestUserStore:
    def test_create_and_authenticate(self, user_store):
        created = user_store.create("sky", "a-long-password", email="sky@example.com")

        assert user_store.authenticate("sky", "a-long-password").id == created.id
        assert user_store.authenticate("sky", "wrong-password") is None
        assert user_store.authenticate("nobody", "a-long-password") is None

    def test_duplicate_username_rejected(self, user_store, user):
        with pytest.raises(ValidationError) as exc_info:
            user_store.create("river", "whatever-password")
        assert exc_info.value.field == "username"

    def test_duplicate_email_rejected(self, user_store):
        user_store.create("sky", "a-long-password", email="same@example.com")
        with pytest.raises(ValidationError):
            user_store.create("sea", "a-long-password", email="same@example.com")

    def test_update_profile_only_touches_given_fields(self, user_store):
        created = user_store.create("sky", "a-long-password", first_name="Sky", last_name="Blue")

        updated = user_store.update_profile(created.id, ProfileUpdate(first_name="Skye"))

        assert updated.first_name == "Skye"
        assert updated.last_name == "Blue"

    def test_update_unknown_user_returns_none(self, user_store):
        assert user_store.update_profile("missing", ProfileUpdate(first_name="x")) is None
