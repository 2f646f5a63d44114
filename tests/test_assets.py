import pytest

from elevatorgame.assets import (
    AssetType,
    Handle,
    PrefabList,
    ProgressCounter,
    SpriteSheetList,
    asset_paths,
    load_assets,
)
from elevatorgame.world import World


def test_asset_paths_fixed_by_source():
    assert asset_paths(AssetType.PLAYER) == ("texture/player.png", "prefabs/player.ron")
    assert asset_paths(AssetType.DOOR) == ("texture/doors.png", "prefabs/doors.ron")


def test_load_assets_sorts_by_animation():
    world = World()
    progress = load_assets(world, [AssetType.PLAYER, AssetType.BULLET])
    sheets = world.resource(SpriteSheetList)
    prefabs = world.resource(PrefabList)
    assert sheets.get(AssetType.BULLET) == Handle("prefabs/bullet.ron", "texture/bullet.png")
    assert sheets.get(AssetType.PLAYER) is None
    assert prefabs.get(AssetType.PLAYER) == Handle("prefabs/player.ron")
    assert prefabs.get(AssetType.BULLET) is None
    assert progress.num_loading == 2
    assert progress.is_complete() is False


def test_resolve_finishes_existing_and_fails_missing(tmp_path):
    (tmp_path / "prefabs").mkdir()
    (tmp_path / "prefabs" / "player.ron").write_text("()")
    world = World()
    progress = load_assets(world, [AssetType.PLAYER, AssetType.DOOR])
    progress.resolve(tmp_path)
    assert progress.num_loading == 0
    assert progress.num_finished == 1
    assert progress.num_failed == 1
    assert any("doors.ron" in error for error in progress.errors)
    assert progress.is_complete() is False


def test_resolve_completes_when_all_present(tmp_path):
    (tmp_path / "prefabs").mkdir()
    (tmp_path / "prefabs" / "elevator.ron").write_text("()")
    progress = load_assets(World(), [AssetType.ELEVATOR])
    progress.resolve(tmp_path)
    assert progress.is_complete() is True


def test_empty_counter_is_complete():
    assert ProgressCounter().is_complete() is True


def test_finish_unknown_handle_raises():
    with pytest.raises(ValueError):
        ProgressCounter().finish(Handle("nothing.ron"))


def test_list_insert_replaces():
    sheets = SpriteSheetList()
    sheets.insert(AssetType.BULLET, Handle("one.ron"))
    sheets.insert(AssetType.BULLET, Handle("two.ron"))
    assert sheets.get(AssetType.BULLET) == Handle("two.ron")
    assert sheets.get(AssetType.GUNS) is None