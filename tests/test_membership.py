"""Membership Request Workflow Tests

Intake, admin decisions, credential issuance and login at the service layer.
"""

import pytest

from club_portal.errors import AlreadyDecided, InvalidInput, NotFound, StoreUnavailable, Unauthorized
from club_portal.services.document_store import MEMBERS, MEMBERSHIP_REQUESTS


# =============================================================================
# MR-001 to MR-003: Intake
# =============================================================================

class TestIntake:
    """Submitting and listing membership requests"""

    def test_submit_creates_pending_request(self, membership_service, pending_request):
        """MR-001: New requests start pending"""
        assert pending_request["status"] == "pending"
        assert pending_request["created_at"]

        pending = membership_service.list_requests("pending")
        assert [r["id"] for r in pending] == [pending_request["id"]]

    def test_list_unknown_status(self, membership_service):
        """MR-002: Listing by an unknown status is rejected"""
        with pytest.raises(InvalidInput):
            membership_service.list_requests("archived")

    def test_list_oldest_first(self, membership_service, store):
        """MR-003: Review queue is ordered by submission time"""
        store.insert(MEMBERSHIP_REQUESTS, {"name": "Late", "status": "pending", "created_at": "2025-02-01T00:00:00"})
        store.insert(MEMBERSHIP_REQUESTS, {"name": "Early", "status": "pending", "created_at": "2025-01-01T00:00:00"})

        assert [r["name"] for r in membership_service.list_requests()] == ["Early", "Late"]


# =============================================================================
# MR-010 to MR-019: Decisions
# =============================================================================

class TestApproval:
    """pending -> approved creates exactly one member"""

    def test_approve_issues_derived_credentials(self, membership_service, store, pending_request):
        """MR-010: Ada Lovelace gets ada / ada123"""
        result = membership_service.decide(pending_request["id"], "approved", "admin-1")

        assert result["credentials"].username == "ada"
        assert result["credentials"].password == "ada123"

        member = store.get(MEMBERS, result["member_id"])
        assert member["name"] == "Ada Lovelace"
        assert member["email"] == "ada@example.com"
        assert member["interests"] == ["AI"]
        assert member["availability"] == "weekends"
        assert member["badges"] == 0
        assert member["points"] == 0
        assert member["username"] == "ada"
        assert member["password"] == "ada123"

    def test_approved_request_leaves_pending_set(self, membership_service, store, pending_request):
        """MR-011: Decided requests disappear from the pending listing"""
        result = membership_service.decide(pending_request["id"], "approved", "admin-1")

        assert membership_service.list_requests("pending") == []
        decided = store.get(MEMBERSHIP_REQUESTS, pending_request["id"])
        assert decided["status"] == "approved"
        assert decided["decided_by"] == "admin-1"
        assert decided["member_id"] == result["member_id"]

    def test_second_approval_fails_without_new_member(self, membership_service, store, pending_request):
        """MR-012: Re-deciding never creates a second member"""
        membership_service.decide(pending_request["id"], "approved", "admin-1")

        with pytest.raises(AlreadyDecided):
            membership_service.decide(pending_request["id"], "approved", "admin-2")

        assert len(store.find(MEMBERS)) == 1

    def test_explicit_credentials_override(self, membership_service, pending_request):
        """MR-013: Admin-supplied credentials win; username is normalised"""
        result = membership_service.decide(
            pending_request["id"], "approved", "admin-1", username=" Countess ", password="analytical"
        )

        assert result["credentials"] == ("countess", "analytical")

    def test_concurrent_decision_loses_cleanly(self, membership_service, store, pending_request, monkeypatch):
        """MR-014: If the status changed under us, the new member is rolled back"""
        monkeypatch.setattr(store, "update_if", lambda *args, **kwargs: None)

        with pytest.raises(AlreadyDecided):
            membership_service.decide(pending_request["id"], "approved", "admin-1")

        assert store.find(MEMBERS) == []


class TestRejection:
    """pending -> rejected creates nothing"""

    def test_reject(self, membership_service, store, pending_request):
        """MR-015: Rejection acknowledges without a member"""
        result = membership_service.decide(pending_request["id"], "rejected", "admin-1")

        assert result == {"member_id": None, "credentials": None}
        assert store.find(MEMBERS) == []
        assert membership_service.list_requests("pending") == []
        assert [r["id"] for r in membership_service.list_requests("rejected")] == [pending_request["id"]]

    def test_rejected_is_terminal(self, membership_service, store, pending_request):
        """MR-016: A rejected request cannot later be approved"""
        membership_service.decide(pending_request["id"], "rejected", "admin-1")

        with pytest.raises(AlreadyDecided):
            membership_service.decide(pending_request["id"], "approved", "admin-1")

        assert store.find(MEMBERS) == []


class TestDecisionFailures:
    """Failures leave the request untouched"""

    @pytest.mark.parametrize("decision", ["invalid-value", "held", "", "APPROVED"])
    def test_invalid_decision_on_pending(self, membership_service, store, pending_request, decision):
        """MR-017: Unknown decisions are InvalidInput"""
        with pytest.raises(InvalidInput):
            membership_service.decide(pending_request["id"], decision, "admin-1")

        assert store.get(MEMBERSHIP_REQUESTS, pending_request["id"])["status"] == "pending"

    def test_invalid_decision_regardless_of_state(self, membership_service, pending_request):
        """MR-018: Invalid decision wins over already-decided and unknown ids"""
        membership_service.decide(pending_request["id"], "approved", "admin-1")

        with pytest.raises(InvalidInput):
            membership_service.decide(pending_request["id"], "invalid-value", "admin-1")
        with pytest.raises(InvalidInput):
            membership_service.decide("does-not-exist", "invalid-value", "admin-1")

    def test_unknown_request(self, membership_service):
        """MR-019: Unknown request id is NotFound"""
        with pytest.raises(NotFound):
            membership_service.decide("does-not-exist", "approved", "admin-1")

    def test_missing_admin(self, membership_service, pending_request):
        with pytest.raises(InvalidInput):
            membership_service.decide(pending_request["id"], "approved", "")

    def test_store_failure_creating_member(self, membership_service, store, pending_request, monkeypatch):
        """Store fault on member insert: request stays pending"""
        def failing_insert(collection, doc):
            raise StoreUnavailable()

        monkeypatch.setattr(store, "insert", failing_insert)

        with pytest.raises(StoreUnavailable):
            membership_service.decide(pending_request["id"], "approved", "admin-1")

        monkeypatch.undo()
        assert store.get(MEMBERSHIP_REQUESTS, pending_request["id"])["status"] == "pending"

    def test_store_failure_after_member_created(self, membership_service, store, pending_request, monkeypatch):
        """Store fault on status write: member creation is undone"""
        def failing_update_if(*args, **kwargs):
            raise StoreUnavailable()

        monkeypatch.setattr(store, "update_if", failing_update_if)

        with pytest.raises(StoreUnavailable):
            membership_service.decide(pending_request["id"], "approved", "admin-1")

        monkeypatch.undo()
        assert store.find(MEMBERS) == []
        assert store.get(MEMBERSHIP_REQUESTS, pending_request["id"])["status"] == "pending"


# =============================================================================
# MR-020 to MR-029: Credentials and Login
# =============================================================================

class TestCredentialsUpdate:
    """Re-issuing member credentials"""

    def test_derives_missing_fields(self, membership_service, store, test_member):
        """MR-020: Omitted username/password come from the name"""
        credentials = membership_service.update_credentials(test_member["id"], password="newpass")

        assert credentials == ("grace", "newpass")
        stored = store.get(MEMBERS, test_member["id"])
        assert stored["password"] == "newpass"
        assert stored["credentials_updated_at"]

    def test_unknown_member(self, membership_service):
        """MR-021: Unknown member is NotFound"""
        with pytest.raises(NotFound):
            membership_service.update_credentials("nope")

    def test_missing_member_id(self, membership_service):
        with pytest.raises(InvalidInput):
            membership_service.update_credentials("")


class TestLogin:
    """Username/password login"""

    def test_login_success(self, membership_service, test_member):
        """MR-022: Matching credentials return the member"""
        member = membership_service.login("grace", "grace123")
        assert member["id"] == test_member["id"]

    def test_username_case_and_whitespace_ignored(self, membership_service, test_member):
        """MR-023: Usernames are matched trimmed and lowercased"""
        assert membership_service.login("  GRACE ", "grace123")["id"] == test_member["id"]

    def test_failures_share_generic_message(self, membership_service, test_member):
        """MR-024: By default the failure does not reveal which part was wrong"""
        with pytest.raises(Unauthorized) as unknown:
            membership_service.login("nobody", "grace123")
        with pytest.raises(Unauthorized) as wrong:
            membership_service.login("grace", "wrong")

        assert unknown.value.message == wrong.value.message == "Invalid username or password."

    def test_failures_with_reason(self, membership_service, test_member):
        """MR-025: Reason-revealing mode distinguishes the two failures"""
        with pytest.raises(Unauthorized) as unknown:
            membership_service.login("nobody", "grace123", reveal_reason=True)
        with pytest.raises(Unauthorized) as wrong:
            membership_service.login("grace", "wrong", reveal_reason=True)

        assert unknown.value.message == "No member found with that username."
        assert wrong.value.message == "Incorrect password. Try again."

    def test_approved_member_can_log_in(self, membership_service, pending_request):
        """MR-026: Credentials issued on approval work for login"""
        result = membership_service.decide(pending_request["id"], "approved", "admin-1")

        member = membership_service.login("ada", "ada123")
        assert member["id"] == result["member_id"]
