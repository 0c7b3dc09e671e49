"""
Tests for the career recommendation service.

Covers:
- Best-effort persistence (a failing row never aborts the batch)
- Regeneration (old rows deleted before any new row is inserted)
- Pipeline error propagation (gateway and parse failures abort before deleting)

The gateway is an AsyncMock and Supabase a MagicMock query-builder chain.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from postgrest.exceptions import APIError

from careerpath.services.recommendation_service import (
    delete_profile_recommendations,
    generate_career_recommendations,
    get_profile_recommendations,
    persist_recommendations,
)
from careerpath.utils.errors import ConfigurationError, ParseError, RateLimited


# =============================================================================
# FIXTURES
# =============================================================================

def _api_error(message: str = "null value in column violates not-null constraint") -> APIError:
    return APIError({"message": message, "code": "23502", "hint": None, "details": None})


class FakeStore:
    """
    Records the order of delete/insert calls on career_recommendations.

    fail_rows: indexes (in insert order) whose insert raises APIError.
    """

    def __init__(self, fail_rows=()):
        self.fail_rows = set(fail_rows)
        self.events = []
        self.inserted = []
        self.client = MagicMock()
        table = self.client.table.return_value
        table.insert.side_effect = self._insert
        table.delete.side_effect = self._delete

    def _insert(self, row):
        idx = len(self.events)
        attempt = sum(1 for e in self.events if e == "insert")
        self.events.append("insert")
        builder = MagicMock()
        if attempt in self.fail_rows:
            builder.execute.side_effect = _api_error()
        else:
            saved = {"id": f"rec-{idx}", "created_at": "2025-01-01T00:00:00Z", **row}
            self.inserted.append(saved)
            builder.execute.return_value = MagicMock(data=[saved])
        return builder

    def _delete(self):
        self.events.append("delete")
        builder = MagicMock()
        builder.eq.return_value.execute.return_value = MagicMock(data=[{"id": "old-1"}, {"id": "old-2"}, {"id": "old-3"}])
        return builder


@pytest.fixture
def gateway(model_content):
    mock_gateway = MagicMock()
    mock_gateway.complete = AsyncMock(return_value=model_content)
    return mock_gateway


# =============================================================================
# PERSISTENCE
# =============================================================================

class TestPersistRecommendations:

    @pytest.mark.asyncio
    async def test_all_rows_saved(self, model_recommendations):
        store = FakeStore()

        saved = await persist_recommendations(store.client, "profile-1", model_recommendations)

        assert len(saved) == 3
        assert [r["career_path"] for r in saved] == [
            "Machine Learning Engineer", "Data Engineer", "Backend Developer"
        ]
        assert all(r["profile_id"] == "profile-1" for r in saved)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("failing_row", [0, 1, 2])
    async def test_failing_row_is_skipped(self, model_recommendations, failing_row):
        store = FakeStore(fail_rows=[failing_row])

        saved = await persist_recommendations(store.client, "profile-1", model_recommendations)

        expected = [r["career_path"] for i, r in enumerate(model_recommendations) if i != failing_row]
        assert [r["career_path"] for r in saved] == expected

    @pytest.mark.asyncio
    async def test_all_rows_fail_returns_empty(self, model_recommendations):
        store = FakeStore(fail_rows=[0, 1, 2])

        saved = await persist_recommendations(store.client, "profile-1", model_recommendations)

        assert saved == []

    @pytest.mark.asyncio
    async def test_absent_fields_are_not_defaulted(self):
        store = FakeStore()

        await persist_recommendations(store.client, "profile-1", [{"career_path": "Surveyor"}])

        inserted_row = store.client.table.return_value.insert.call_args[0][0]
        assert inserted_row == {"profile_id": "profile-1", "career_path": "Surveyor"}

    @pytest.mark.asyncio
    async def test_unknown_fields_are_not_written(self):
        store = FakeStore()

        await persist_recommendations(
            store.client, "profile-1", [{"career_path": "X", "salary": "high"}]
        )

        inserted_row = store.client.table.return_value.insert.call_args[0][0]
        assert "salary" not in inserted_row

    @pytest.mark.asyncio
    async def test_non_object_draft_is_skipped(self, model_recommendations):
        store = FakeStore()
        drafts = [model_recommendations[0], "not an object", model_recommendations[1]]

        saved = await persist_recommendations(store.client, "profile-1", drafts)

        assert len(saved) == 2
        assert store.client.table.return_value.insert.call_count == 2

    @pytest.mark.asyncio
    async def test_empty_insert_result_is_skipped(self, supabase_client):
        supabase_client.table.return_value.insert.return_value.execute.return_value = MagicMock(data=[])

        saved = await persist_recommendations(supabase_client, "profile-1", [{"career_path": "X"}])

        assert saved == []


class TestStoreQueries:

    @pytest.mark.asyncio
    async def test_delete_scoped_to_profile(self, supabase_client):
        supabase_client.table.return_value.delete.return_value.eq.return_value.execute.return_value = \
            MagicMock(data=[{"id": "a"}, {"id": "b"}])

        deleted = await delete_profile_recommendations(supabase_client, "profile-1")

        assert deleted == 2
        supabase_client.table.assert_called_with("career_recommendations")
        supabase_client.table.return_value.delete.return_value.eq.assert_called_with("profile_id", "profile-1")

    @pytest.mark.asyncio
    async def test_list_ordered_by_match_score(self, supabase_client):
        chain = supabase_client.table.return_value.select.return_value.eq.return_value
        chain.order.return_value.execute.return_value = MagicMock(data=[{"match_score": 90}])

        result = await get_profile_recommendations(supabase_client, "profile-1")

        assert result == [{"match_score": 90}]
        chain.order.assert_called_with("match_score", desc=True)


# =============================================================================
# PIPELINE
# =============================================================================

class TestGenerateCareerRecommendations:

    @pytest.mark.asyncio
    async def test_end_to_end(self, gateway, profile, skills, interests):
        store = FakeStore()

        saved = await generate_career_recommendations(
            store.client, profile, skills, interests, gateway=gateway
        )

        assert len(saved) == 3
        system_prompt, user_prompt = gateway.complete.call_args[0]
        assert "career counselor" in system_prompt
        assert "computer" in user_prompt
        assert "Year 2" in user_prompt
        assert "Python (intermediate)" in user_prompt
        assert "AI" in user_prompt

    @pytest.mark.asyncio
    async def test_old_batch_deleted_before_insert(self, gateway, profile, skills, interests):
        store = FakeStore()

        saved = await generate_career_recommendations(
            store.client, profile, skills, interests, gateway=gateway
        )

        assert store.events == ["delete", "insert", "insert", "insert"]
        assert {r["id"] for r in saved}.isdisjoint({"old-1", "old-2", "old-3"})

    @pytest.mark.asyncio
    async def test_partial_persistence_still_succeeds(self, gateway, profile, skills, interests):
        store = FakeStore(fail_rows=[1])

        saved = await generate_career_recommendations(
            store.client, profile, skills, interests, gateway=gateway
        )

        assert len(saved) == 2

    @pytest.mark.asyncio
    async def test_gateway_failure_keeps_previous_batch(self, profile, skills, interests):
        store = FakeStore()
        failing_gateway = MagicMock()
        failing_gateway.complete = AsyncMock(side_effect=RateLimited())

        with pytest.raises(RateLimited):
            await generate_career_recommendations(
                store.client, profile, skills, interests, gateway=failing_gateway
            )

        assert store.events == []

    @pytest.mark.asyncio
    async def test_parse_failure_keeps_previous_batch(self, profile, skills, interests):
        store = FakeStore()
        prose_gateway = MagicMock()
        prose_gateway.complete = AsyncMock(return_value="Sorry, I can't do that.")

        with pytest.raises(ParseError):
            await generate_career_recommendations(
                store.client, profile, skills, interests, gateway=prose_gateway
            )

        assert store.events == []

    @pytest.mark.asyncio
    async def test_custom_extractor_is_used(self, gateway, profile, skills, interests):
        store = FakeStore()
        extractor = MagicMock()
        extractor.extract.return_value = [{"career_path": "Only One"}]

        saved = await generate_career_recommendations(
            store.client, profile, skills, interests, gateway=gateway, extractor=extractor
        )

        assert [r["career_path"] for r in saved] == ["Only One"]
        extractor.extract.assert_called_once()

    @pytest.mark.asyncio
    async def test_missing_credential_raises_before_call(self, profile, skills, interests):
        store = FakeStore()

        with patch(
            "careerpath.services.recommendation_service.get_gateway_client",
            side_effect=ConfigurationError(),
        ):
            with pytest.raises(ConfigurationError):
                await generate_career_recommendations(store.client, profile, skills, interests)

        assert store.events == []
