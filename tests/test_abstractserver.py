import pytest

from mdnsengine.abstractserver import AbstractServer
from mdnsengine.dns import MDNS_IPV4_ADDRESS, MDNS_PORT
from mdnsengine.message import Message


class RecordingServer(AbstractServer):
    def __init__(self):
        super().__init__()
        self.sent = []
        self.sent_to_all = []

    def send_message(self, message):
        self.sent.append(message)

    def send_message_to_all(self, message):
        self.sent_to_all.append(message)


def test_cannot_instantiate_abstract_server():
    with pytest.raises(TypeError):
        AbstractServer()


def test_send_methods_dispatch_to_subclass():
    server = RecordingServer()
    direct = Message(address=MDNS_IPV4_ADDRESS, port=MDNS_PORT)
    multicast = Message()
    server.send_message(direct)
    server.send_message_to_all(multicast)
    assert server.sent == [direct]
    assert server.sent_to_all == [multicast]


def test_message_received_signal_delivers_message():
    server = RecordingServer()
    received = []
    server.message_received.connect(received.append)
    message = Message(is_response=True)
    server.message_received.emit(message)
    assert received == [message]


def test_error_signal_delivers_description_only_to_error_slots():
    server = RecordingServer()
    errors = []
    received = []
    server.error.connect(errors.append)
    server.message_received.connect(received.append)
    message = Message()
    server.error.emit("socket failure")
    server.message_received.emit(message)
    assert errors == ["socket failure"]
    assert received == [message]


def test_servers_have_independent_signals():
    first = RecordingServer()
    second = RecordingServer()
    received = []
    first.message_received.connect(received.append)
    ignored = Message()
    delivered = Message(is_response=True)
    second.message_received.emit(ignored)
    first.message_received.emit(delivered)
    assert len(received) == 1
    assert received[0] is delivered