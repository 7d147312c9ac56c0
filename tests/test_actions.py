import time

import pytest

from coemu.actions import (
    ActionType,
    ItemActionType,
    KillMode,
    MsgAction,
    MsgItem,
    kill_mode_notice,
)
from coemu.lohi import construct


def test_packet_ids():
    action = MsgAction.new(1, 0, 0, 0, ActionType.JUMP)
    assert action.PACKET_ID == 1010
    reply = MsgItem(action_type=ItemActionType.PING).ping_reply()
    assert reply.PACKET_ID == 1009


def test_action_type_lookup():
    assert ActionType.from_value(74) is ActionType.SEND_LOCATION
    assert ActionType.from_value(133) is ActionType.JUMP
    assert ActionType.from_value(1) is ActionType.UNKNOWN


def test_new_stamps_current_time():
    before = int(time.time())
    msg = MsgAction.new(7, 1, 2, 3, ActionType.LEAVE_MAP)
    after = int(time.time())
    assert before <= msg.client_timestamp <= after
    assert msg.kind() is ActionType.LEAVE_MAP
    assert (msg.character_id, msg.data1, msg.data2, msg.details) == (7, 1, 2, 3)


def test_unknown_action_kind():
    msg = MsgAction(action_type=9999)
    assert msg.kind() is ActionType.UNKNOWN
    assert msg.action_type == 9999


def test_position_and_target_unpack():
    msg = MsgAction(data1=construct(50, 60), data2=construct(378, 430))
    assert msg.position() == (430, 378)
    assert msg.target() == (60, 50)


def test_at_packs_location():
    msg = MsgAction.at(5, 430, 378, 4, 1002, ActionType.SEND_LOCATION)
    assert msg.position() == (430, 378)
    assert msg.details == 4
    assert msg.data1 == 1002


@pytest.mark.parametrize(
    "field,value",
    [("data1", 1 << 32), ("details", 1 << 16), ("action_type", -1)],
)
def test_out_of_range_fields_rejected(field, value):
    with pytest.raises(ValueError):
        MsgAction(**{field: value})


def test_kill_mode_notices():
    assert kill_mode_notice(KillMode.FREE) == "In free mode, you can attack everybody."
    assert kill_mode_notice(1) == "In safe mode, you can only attack monsters."
    assert kill_mode_notice(3) == (
        "In arrestment mode, you can only attack monsters and black name players."
    )


def test_unknown_kill_mode_falls_back_to_free():
    assert kill_mode_notice(42) == kill_mode_notice(KillMode.FREE)
    assert MsgAction(data1=2).kill_mode() is KillMode.TEAM


def test_item_kind_lookup():
    assert MsgItem(action_type=27).kind() is ItemActionType.PING
    assert MsgItem(action_type=500).kind() is ItemActionType.UNKNOWN


def test_ping_reply_adds_delay():
    ping = MsgItem(
        character_id=1, param0=2, action_type=ItemActionType.PING,
        client_timestamp=1000, param1=3,
    )
    reply = ping.ping_reply()
    assert reply.client_timestamp == 1030
    assert (reply.character_id, reply.param0, reply.param1) == (1, 2, 3)
    assert reply.kind() is ItemActionType.PING
    assert ping.client_timestamp == 1000


def test_ping_reply_wraps_timestamp():
    ping = MsgItem(action_type=ItemActionType.PING, client_timestamp=0xFFFF_FFFF)
    assert ping.ping_reply().client_timestamp == 29


def test_ping_reply_requires_ping():
    with pytest.raises(ValueError):
        MsgItem(action_type=ItemActionType.BUY).ping_reply()