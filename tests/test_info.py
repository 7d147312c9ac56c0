import pytest

from coemu.info import (
    ItemInfoAction,
    MsgItemInfo,
    MsgNpc,
    MsgNpcInfo,
    MsgPlayer,
    MsgUserInfo,
    NpcActionKind,
)


def test_user_info_defaults_match_source():
    info = MsgUserInfo()
    assert info.mesh == 1003 + 10000
    assert info.hair_style == (3 * 100) + 11
    assert info.health_points == 318
    assert info.character_name == "Test"
    assert info.spouse == "None"
    assert info.list_count == 2
    assert info.show_name is True


def test_user_info_for_character_adds_avatar_to_mesh():
    info = MsgUserInfo.for_character(
        character_id=7,
        name="Hero",
        mesh=1003,
        avatar=1,
        hair_style=311,
        silver=100,
        cps=0,
        experience=0,
        strength=4,
        agility=6,
        vitality=12,
        spirit=6,
        attribute_points=0,
        health_points=318,
        mana_points=0,
        kill_points=0,
        level=1,
        current_class=10,
        previous_class=0,
        rebirths=0,
    )
    assert info.mesh == MsgUserInfo().mesh
    assert info.character_name == "Hero"
    assert info.spouse == "None"
    assert info.list_count == 2


def test_user_info_rejects_out_of_range():
    with pytest.raises(ValueError):
        MsgUserInfo(level=256)


def test_player_for_character_duplicates_id_and_level():
    player = MsgPlayer.for_character(
        character_id=42,
        name="Bot42",
        mesh=1003,
        avatar=1,
        health_points=318,
        hair_style=311,
        level=15,
        x=50,
        y=60,
        direction=3,
    )
    assert player.character_id2 == player.character_id == 42
    assert player.level2 == player.level == 15
    assert player.mesh == MsgUserInfo().mesh
    assert player.list_count == 1
    assert (player.x, player.y) == (50, 60)
    assert player.character_name == "Bot42"


def test_player_rejects_out_of_range_position():
    with pytest.raises(ValueError):
        MsgPlayer(x=70000)


def test_item_info_action_kinds():
    assert MsgItemInfo(action=1).action_kind() is ItemInfoAction.ADD_ITEM
    assert ItemInfoAction.from_value(200) is ItemInfoAction.NONE


def test_item_info_rejects_wide_byte():
    with pytest.raises(ValueError):
        MsgItemInfo(plus=256)


def test_npc_info_with_name_keeps_original():
    base = MsgNpcInfo(id=10, x=5, y=6, look=1, kind=2, sort=3)
    named = base.with_name("Guard")
    assert named.name == "Guard"
    assert named.list_count == 1
    assert base.name is None
    assert base.list_count == 0
    assert (named.id, named.x, named.y) == (base.id, base.x, base.y)


def test_npc_kind_known_and_unknown():
    assert MsgNpc(npc_id=1, action=255).kind() is NpcActionKind.CANCEL_INTERACTION
    assert MsgNpc(npc_id=1, action=4).kind() is NpcActionKind.CHANGE_POSITION
    assert MsgNpc(npc_id=1, action=77).kind() is NpcActionKind.ACTIVATE


def test_npc_rejects_negative_id():
    with pytest.raises(ValueError):
        MsgNpc(npc_id=-1)