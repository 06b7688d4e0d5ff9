"""
Unit tests for the access gate, run against in-memory collaborators.
"""
from urllib.parse import parse_qs, urlsplit

from django.db import DatabaseError
from django.test import RequestFactory, SimpleTestCase

from protected_pages.exceptions import CollaboratorUnavailable
from protected_pages.gate import AccessGate, Allow, RedirectToLogin, Unavailable
from protected_pages.matcher import ProtectedPathRecord
from protected_pages.sessions import SessionUnlockStore


class FakeRecords:
    def __init__(self, *records):
        self.records = list(records)
        self.calls = 0

    def list_active_records(self):
        self.calls += 1
        return list(self.records)


class BrokenRecords:
    def list_active_records(self):
        raise CollaboratorUnavailable("protected pages store unavailable")


class FakeAliases:
    def __init__(self, mapping=None):
        self.mapping = mapping or {}

    def get_alias_by_path(self, path):
        return self.mapping.get(path, path)


class FakeKillSwitch:
    def __init__(self):
        self.triggered = []

    def trigger(self, request):
        self.triggered.append(request)


class AccessGateTests(SimpleTestCase):

    def setUp(self):
        self.factory = RequestFactory()
        self.kill_switch = FakeKillSwitch()
        self.unlocks = SessionUnlockStore()

    def make_gate(self, records, aliases=None, bypass=False):
        return AccessGate(
            records=records,
            aliases=aliases or FakeAliases(),
            unlocks=self.unlocks,
            kill_switch=self.kill_switch,
            has_bypass=lambda request: bypass,
        )

    def get(self, path, session=None):
        request = self.factory.get(path)
        request.session = session if session is not None else {}
        return request

    def test_bypass_skips_everything(self):
        records = FakeRecords(ProtectedPathRecord(1, "/*"))
        gate = self.make_gate(records, bypass=True)
        self.assertIsInstance(gate.evaluate(self.get("/secret")), Allow)
        self.assertEqual(records.calls, 0)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_unprotected_path_allowed(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/secret")))
        self.assertIsInstance(gate.evaluate(self.get("/public")), Allow)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_empty_store_allows(self):
        gate = self.make_gate(FakeRecords())
        self.assertIsInstance(gate.evaluate(self.get("/anything")), Allow)

    def test_locked_session_redirected(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(7, "/secret/*")))
        request = self.get("/secret/page")
        decision = gate.evaluate(request)

        self.assertIsInstance(decision, RedirectToLogin)
        self.assertEqual(decision.pid, 7)
        url = urlsplit(decision.url)
        self.assertEqual(url.path, "/protected-page/")
        query = parse_qs(url.query)
        self.assertEqual(query["protected_page"], ["7"])
        self.assertEqual(query["destination"], ["/secret/page"])
        self.assertEqual(self.kill_switch.triggered, [request])

    def test_destination_keeps_query_string(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(7, "/secret")))
        decision = gate.evaluate(self.get("/secret?page=2"))
        self.assertEqual(parse_qs(urlsplit(decision.url).query)["destination"], ["/secret?page=2"])

    def test_unlocked_session_allowed(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(7, "/secret")))
        session = {}
        self.unlocks.unlock(session, 7)
        self.assertIsInstance(gate.evaluate(self.get("/secret", session)), Allow)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_unlock_is_per_record(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/a"), ProtectedPathRecord(2, "/b")))
        session = {}
        self.unlocks.unlock(session, 1)
        self.assertIsInstance(gate.evaluate(self.get("/a", session)), Allow)
        decision = gate.evaluate(self.get("/b", session))
        self.assertIsInstance(decision, RedirectToLogin)
        self.assertEqual(decision.pid, 2)

    def test_request_path_lowercased(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(3, "/Bar")))
        self.assertIsInstance(gate.evaluate(self.get("/BAR/")), RedirectToLogin)

    def test_alias_used_for_matching(self):
        aliases = FakeAliases({"/node/5": "/About-Us"})
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(4, "/about-us")), aliases=aliases)
        decision = gate.evaluate(self.get("/node/5/"))
        self.assertIsInstance(decision, RedirectToLogin)
        self.assertEqual(decision.pid, 4)

    def test_login_page_never_gated(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/*")))
        self.assertIsInstance(gate.evaluate(self.get("/protected-page/?protected_page=1")), Allow)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_lock_and_admin_login_never_gated(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/*")))
        for path in ("/protected-page/lock/", "/admin/login/"):
            self.assertEqual(gate.evaluate(self.get(path)), Allow("exempt"))
        self.assertIsInstance(gate.evaluate(self.get("/admin/")), RedirectToLogin)

    def test_bypass_lookup_failure_reported(self):
        def broken_bypass(request):
            raise DatabaseError("auth tables gone")

        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/secret")))
        gate.has_bypass = broken_bypass
        self.assertEqual(gate.evaluate(self.get("/public")), Unavailable("auth tables gone"))
        self.assertEqual(self.kill_switch.triggered, [])

    def test_session_lookup_failure_reported(self):
        class BrokenUnlocks:
            def is_unlocked(self, session, pid):
                raise DatabaseError("session table gone")

        gate = self.make_gate(FakeRecords(ProtectedPathRecord(1, "/secret")))
        gate.unlocks = BrokenUnlocks()
        self.assertIsInstance(gate.evaluate(self.get("/secret")), Unavailable)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_store_failure_reported(self):
        gate = self.make_gate(BrokenRecords())
        decision = gate.evaluate(self.get("/secret"))
        self.assertIsInstance(decision, Unavailable)
        self.assertEqual(self.kill_switch.triggered, [])

    def test_repeatable(self):
        gate = self.make_gate(FakeRecords(ProtectedPathRecord(9, "/x*")))
        first = gate.evaluate(self.get("/xyz"))
        second = gate.evaluate(self.get("/xyz"))
        self.assertEqual(first, second)
