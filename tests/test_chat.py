from uuid import uuid4

from tests.helpers import auth_headers


def send_message(client, token, receiver_id, text):
    return client.post(f"/api/chat/send/{receiver_id}", json={"text": text}, headers=auth_headers(token))


def test_match_and_chat_end_to_end(client, register):
    alice_token, alice_id = register("alice")
    bob_token, bob_id = register("bob")

    sent = client.post(f"/api/requests/send/{bob_id}", headers=auth_headers(alice_token))
    assert sent.status_code == 201
    assert sent.json()["request"]["status"] == "pending"
    request_id = sent.json()["request"]["id"]

    accepted = client.post(f"/api/requests/accept/{request_id}", headers=auth_headers(bob_token))
    assert accepted.status_code == 200
    assert accepted.json()["request"]["status"] == "accepted"

    message = send_message(client, alice_token, bob_id, "hi")
    assert message.status_code == 201
    assert message.json()["message"] == "Message sent successfully!"

    listed = client.get(f"/api/chat/messages/{alice_id}", headers=auth_headers(bob_token))
    assert listed.status_code == 200
    messages = listed.json()
    assert len(messages) == 1
    assert messages[0]["text"] == "hi"
    assert messages[0]["is_read"] is False

    marked = client.post(f"/api/chat/messages/{messages[0]['id']}/markAsRead", headers=auth_headers(bob_token))
    assert marked.status_code == 200
    assert marked.json()["chat_message"]["is_read"] is True

    unmatched = client.post(f"/api/requests/unmatch/{bob_id}", headers=auth_headers(alice_token))
    assert unmatched.status_code == 200

    assert send_message(client, bob_token, alice_id, "still there?").status_code == 403
    assert client.get(f"/api/chat/messages/{alice_id}", headers=auth_headers(bob_token)).status_code == 403


def test_send_requires_match(client, register):
    alice_token, _ = register("alice")
    _, bob_id = register("bob")
    client.post(f"/api/requests/send/{bob_id}", headers=auth_headers(alice_token))

    response = send_message(client, alice_token, bob_id, "hello")

    assert response.status_code == 403
    assert response.json()["detail"] == "Forbidden: You can only send messages to matched users."


def test_list_requires_match(client, register):
    alice_token, _ = register("alice")
    _, bob_id = register("bob")

    response = client.get(f"/api/chat/messages/{bob_id}", headers=auth_headers(alice_token))

    assert response.status_code == 403


def test_empty_text_rejected(client, matched_pair):
    alice_token, _ = matched_pair["alice"]
    _, bob_id = matched_pair["bob"]

    for text in ("", "   ", None):
        response = send_message(client, alice_token, bob_id, text)
        assert response.status_code == 400
        assert response.json()["detail"] == "Message text cannot be empty."


def test_empty_text_checked_before_match(client, register):
    alice_token, _ = register("alice")
    _, bob_id = register("bob")

    response = send_message(client, alice_token, bob_id, "  ")

    assert response.status_code == 400


def test_text_is_trimmed(client, matched_pair):
    alice_token, _ = matched_pair["alice"]
    _, bob_id = matched_pair["bob"]

    response = send_message(client, alice_token, bob_id, "  hello  ")

    assert response.json()["chat_message"]["text"] == "hello"


def test_messages_ordered_oldest_first(client, matched_pair):
    alice_token, alice_id = matched_pair["alice"]
    bob_token, bob_id = matched_pair["bob"]
    send_message(client, alice_token, bob_id, "first")
    send_message(client, bob_token, alice_id, "second")
    send_message(client, alice_token, bob_id, "third")

    response = client.get(f"/api/chat/messages/{bob_id}", headers=auth_headers(alice_token))

    assert [m["text"] for m in response.json()] == ["first", "second", "third"]


def test_mark_as_read_only_by_receiver(client, matched_pair):
    alice_token, _ = matched_pair["alice"]
    _, bob_id = matched_pair["bob"]
    message_id = send_message(client, alice_token, bob_id, "hi").json()["chat_message"]["id"]

    response = client.post(f"/api/chat/messages/{message_id}/markAsRead", headers=auth_headers(alice_token))

    assert response.status_code == 403


def test_mark_as_read_twice(client, matched_pair):
    alice_token, _ = matched_pair["alice"]
    bob_token, bob_id = matched_pair["bob"]
    message_id = send_message(client, alice_token, bob_id, "hi").json()["chat_message"]["id"]
    url = f"/api/chat/messages/{message_id}/markAsRead"

    assert client.post(url, headers=auth_headers(bob_token)).status_code == 200
    again = client.post(url, headers=auth_headers(bob_token))

    assert again.status_code == 400
    assert again.json()["detail"] == "Message is already marked as read."


def test_mark_as_read_missing_message(client, register):
    token, _ = register("alice")

    response = client.post(f"/api/chat/messages/{uuid4()}/markAsRead", headers=auth_headers(token))

    assert response.status_code == 404


def test_mark_all_as_read(client, matched_pair):
    alice_token, alice_id = matched_pair["alice"]
    bob_token, bob_id = matched_pair["bob"]
    send_message(client, alice_token, bob_id, "one")
    send_message(client, alice_token, bob_id, "two")
    send_message(client, bob_token, alice_id, "reply")
    url = f"/api/chat/messages/markAllAsRead/{alice_id}"

    response = client.post(url, headers=auth_headers(bob_token))

    assert response.status_code == 200
    assert response.json()["updated_count"] == 2

    again = client.post(url, headers=auth_headers(bob_token))
    assert again.status_code == 200
    assert again.json()["updated_count"] == 0

    messages = client.get(f"/api/chat/messages/{alice_id}", headers=auth_headers(bob_token)).json()
    read_flags = {m["text"]: m["is_read"] for m in messages}
    assert read_flags == {"one": True, "two": True, "reply": False}


def test_mark_all_as_read_without_messages(client, register):
    token, _ = register("alice")

    response = client.post(f"/api/chat/messages/markAllAsRead/{uuid4()}", headers=auth_headers(token))

    assert response.status_code == 200
    assert response.json()["updated_count"] == 0


def test_history_returns_after_rematch(client, matched_pair):
    alice_token, alice_id = matched_pair["alice"]
    bob_token, bob_id = matched_pair["bob"]
    send_message(client, alice_token, bob_id, "before unmatch")
    client.post(f"/api/requests/unmatch/{alice_id}", headers=auth_headers(bob_token))

    request_id = client.post(
        f"/api/requests/send/{alice_id}", headers=auth_headers(bob_token)
    ).json()["request"]["id"]
    client.post(f"/api/requests/accept/{request_id}", headers=auth_headers(alice_token))

    response = client.get(f"/api/chat/messages/{bob_id}", headers=auth_headers(alice_token))

    assert response.status_code == 200
    assert [m["text"] for m in response.json()] == ["before unmatch"]
