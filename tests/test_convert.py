import dataclasses
import unittest

from pling.convert import convert, convert_device, convert_message
from pling.exceptions import InvalidInput
from pling.models import Device, Message


class Notification:
    def __init__(self, text):
        self.text = text

    def to_pling_message(self):
        return Message(self.text, badge=3)


class Phone:
    def __init__(self, push_token):
        self.push_token = push_token

    def to_pling_device(self):
        return Device(self.push_token, "android")


class TestConvert(unittest.TestCase):
    def test_canonical_values_convert_to_themselves(self):
        msg = Message("hi")
        dev = Device("tok", "android")
        self.assertIs(convert(msg, "message"), msg)
        self.assertIs(convert(dev, "device"), dev)

    def test_caller_objects_use_their_capability(self):
        self.assertEqual(convert_message(Notification("hello")), Message("hello", badge=3))
        self.assertEqual(convert_device(Phone("abc")), Device("abc", "android"))

    def test_missing_capability_names_type_and_method(self):
        with self.assertRaises(InvalidInput) as ctx:
            convert("just a string", "message")
        self.assertIn("str", str(ctx.exception))
        self.assertIn("to_pling_message", str(ctx.exception))

    def test_wrong_role_is_rejected(self):
        # a message-like object does not qualify as a device
        with self.assertRaises(InvalidInput) as ctx:
            convert(Notification("x"), "device")
        self.assertIn("Notification", str(ctx.exception))
        self.assertIn("to_pling_device", str(ctx.exception))

    def test_none_is_rejected(self):
        with self.assertRaises(InvalidInput):
            convert(None, "device")

    def test_unknown_kind(self):
        with self.assertRaises(ValueError):
            convert(Message("x"), "envelope")


def test_models_are_immutable_and_copy_on_write():
    msg = Message("hello", sound="default")
    louder = msg.replace(sound="alarm.caf")
    assert louder is not msg
    assert msg.sound == "default"
    assert louder.sound == "alarm.caf"
    try:
        msg.body = "changed"
    except dataclasses.FrozenInstanceError:
        pass
    else:  # pragma: no cover
        raise AssertionError("Message should be frozen")


def test_validity():
    assert Message("x").valid()
    assert not Message("").valid()
    assert Device("tok", "android").valid()
    assert not Device("", "android").valid()
    assert not Device("tok", "").valid()


if __name__ == "__main__":
    unittest.main()


def test_message_fields_are_the_ones_gateways_read():
    assert [f.name for f in dataclasses.fields(Message)] == ["body", "badge", "sound", "subject", "payload"]
