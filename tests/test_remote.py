import pytest
import requests

from promptle.services.remote import (
    BackendClient, InProcessBackend, RemoteServiceError, attempt_remote, check_hint_payload
)
from promptle.services.store_service import MemoryStore

from conftest import FakeResponse, FakeSession


def client_for(*responses):
    session = FakeSession(*responses)
    return BackendClient("http://backend.test/", timeout=3, session=session), session


def test_fetch_best_streak_request_shape():
    client, session = client_for(FakeResponse({'ok': True, 'best_streak': 4}))

    assert client.fetch_best_streak("alice smith") == 4

    method, url, kwargs = session.requests[0]
    assert method == 'GET'
    assert url == "http://backend.test/api/streak/alice%20smith"
    assert kwargs == {'timeout': 3}


def test_push_best_streak_returns_merged_value():
    client, session = client_for(FakeResponse({'ok': True, 'best_streak': 9}))

    assert client.push_best_streak("alice", 5) == 9

    method, url, kwargs = session.requests[0]
    assert (method, url) == ('POST', "http://backend.test/api/streak")
    assert kwargs['json'] == {'user_id': "alice", 'best_streak': 5}


def test_save_word_posts_payload():
    client, session = client_for(FakeResponse({'ok': True}))
    client.save_word("alice", "CRANE")
    assert session.requests[0][2]['json'] == {'user_id': "alice", 'word': "CRANE"}


def test_fetch_hint_posts_secret_and_kind():
    payload = {'ok': True, 'meaning_hint': 'Lifts heavy things.'}
    client, session = client_for(FakeResponse(payload))

    assert client.fetch_hint("CRANE", "meaning") == payload
    assert session.requests[0][1] == "http://backend.test/api/hint"
    assert session.requests[0][2]['json'] == {'secret': "CRANE", 'kind': "meaning"}


@pytest.mark.parametrize("response", [
    FakeResponse({'ok': False, 'error': 'Database unavailable'}),
    FakeResponse({'best_streak': 3}),
    FakeResponse({'ok': True}),
    FakeResponse({'ok': True, 'best_streak': True}),
    FakeResponse({'ok': True, 'best_streak': -1}),
    FakeResponse({'ok': True, 'best_streak': 'many'}),
    FakeResponse(['ok']),
])
def test_malformed_streak_responses_raise(response):
    client, _ = client_for(response)
    with pytest.raises(RemoteServiceError):
        client.fetch_best_streak("alice")


def test_http_error_status_raises():
    client, _ = client_for(FakeResponse({'ok': False}, status_code=500))
    with pytest.raises(requests.HTTPError):
        client.fetch_best_streak("alice")


def test_invalid_json_raises():
    client, _ = client_for(FakeResponse(ValueError("not json")))
    with pytest.raises(ValueError):
        client.save_word("alice", "CRANE")


def test_hint_payload_missing_field_raises():
    client, _ = client_for(FakeResponse({'ok': True, 'helper_word': 'CRATE'}))
    with pytest.raises(RemoteServiceError):
        client.fetch_hint("CRANE", "letters")


def test_check_hint_payload_rejects_unknown_kind():
    with pytest.raises(RemoteServiceError):
        check_hint_payload({'ok': True, 'meaning_hint': 'x'}, 'synonym')


def test_attempt_remote_returns_result():
    assert attempt_remote(lambda: 5, fallback=lambda: 0) == 5


def test_attempt_remote_falls_back_on_error():
    def boom():
        raise requests.Timeout("too slow")

    assert attempt_remote(boom, fallback=lambda: "local", name='fetch_hint') == "local"


def test_attempt_remote_falls_back_when_validation_fails():
    def at_least_three(value):
        if value < 3:
            raise RemoteServiceError("too small")

    assert attempt_remote(lambda: 1, fallback=lambda: 3, validate=at_least_three) == 3
    assert attempt_remote(lambda: 4, fallback=lambda: 3, validate=at_least_three) == 4


def test_attempt_remote_logs_failures(caplog):
    def boom():
        raise ConnectionError("offline")

    with caplog.at_level('WARNING', logger='promptle'):
        attempt_remote(boom, fallback=lambda: None, name='push_best_streak', user_id="alice")

    assert any('push_best_streak' in record.getMessage() for record in caplog.records)


class StubGenerator:
    def __init__(self, payload):
        self.payload = payload

    def generate(self, secret, kind):
        return self.payload


def test_in_process_backend_uses_store():
    store = MemoryStore()
    backend = InProcessBackend(store, StubGenerator({'ok': True, 'meaning_hint': 'Lifts things.'}))

    assert backend.fetch_best_streak("alice") == 0
    assert backend.push_best_streak("alice", 3) == 3
    assert backend.push_best_streak("alice", 1) == 3
    backend.save_word("alice", "CRANE")

    assert store.used_words("alice") == ["CRANE"]
    assert backend.fetch_hint("CRANE", "meaning")['meaning_hint'] == 'Lifts things.'


def test_in_process_backend_checks_hint_payload():
    backend = InProcessBackend(MemoryStore(), StubGenerator({'ok': True}))
    with pytest.raises(RemoteServiceError):
        backend.fetch_hint("CRANE", "letters")
