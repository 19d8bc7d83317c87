"""Tests for StateStore — the profile tree and the ``this`` pointer."""

from __future__ import annotations

import os

import pytest

from tabkeys.core.errors import StateIntegrityError
from tabkeys.core.state_store import StateStore
from tests.helpers.profile_scaffold import create_state, link, make_script, touch


class TestPointer:
    def test_absent_pointer(self, store):
        assert store.pointer_exists() is False
        assert store.current_path() is None
        assert store.current_state() is None
        store.check_pointer()

    def test_set_current_creates_symlink(self, store, profiles_dir):
        state = create_state(profiles_dir, "app/main")
        assert store.set_current(state) == state
        assert store.pointer_path.is_symlink()
        assert store.current_path() == state

    def test_set_current_replaces_pointer(self, store, profiles_dir):
        a = create_state(profiles_dir, "a")
        b = create_state(profiles_dir, "b")
        store.set_current(a)
        store.set_current(b)
        assert store.current_path() == b

    def test_set_current_canonicalises_symlinked_target(self, store, profiles_dir):
        real = create_state(profiles_dir, "ring/two")
        one = create_state(profiles_dir, "ring/one")
        via = link(one / "0-next", real)
        assert store.set_current(via) == real
        assert store.current_path() == real

    def test_regular_file_pointer_is_fatal(self, store, profiles_dir):
        target = create_state(profiles_dir, "a")
        (profiles_dir / "this").write_text("oops")
        with pytest.raises(StateIntegrityError, match="non-symlink"):
            store.set_current(target)
        with pytest.raises(StateIntegrityError):
            store.require_current()

    def test_directory_pointer_is_fatal(self, store, profiles_dir):
        (profiles_dir / "this").mkdir()
        with pytest.raises(StateIntegrityError):
            store.check_pointer()
        with pytest.raises(StateIntegrityError):
            store.current_path()

    def test_symlink_to_file_is_fatal(self, store, profiles_dir):
        touch(profiles_dir / "somefile")
        (profiles_dir / "this").symlink_to(profiles_dir / "somefile")
        with pytest.raises(StateIntegrityError):
            store.check_pointer()

    def test_dangling_pointer_counts_as_absent(self, store, profiles_dir):
        (profiles_dir / "this").symlink_to(profiles_dir / "gone")
        assert store.pointer_exists() is False
        target = create_state(profiles_dir, "init")
        assert store.set_current(target) == target

    def test_concurrent_writer_last_rename_wins(self, store, profiles_dir, monkeypatch):
        a = create_state(profiles_dir, "a")
        b = create_state(profiles_dir, "b")
        real_symlink = os.symlink

        def symlink_then_other_writer(src, dst, target_is_directory=False):
            real_symlink(src, dst, target_is_directory=target_is_directory)
            # Another invocation repoints "this" before our rename.
            store.pointer_path.unlink(missing_ok=True)
            real_symlink(a, store.pointer_path, target_is_directory=True)

        monkeypatch.setattr(os, "symlink", symlink_then_other_writer)
        assert store.set_current(b) == b

        assert store.current_path() == b
        assert sorted(p.name for p in profiles_dir.iterdir()) == ["a", "b", "this"]

    def test_pointer_never_absent_while_repointing(self, store, profiles_dir, monkeypatch):
        a = create_state(profiles_dir, "a")
        b = create_state(profiles_dir, "b")
        store.set_current(a)
        seen = []
        real_replace = os.replace

        def observing_replace(src, dst):
            seen.append(os.readlink(store.pointer_path))
            real_replace(src, dst)

        monkeypatch.setattr(os, "replace", observing_replace)
        store.set_current(b)
        assert seen == [str(a)]
        assert store.current_path() == b

    def test_stale_temporary_link_replaced(self, store, profiles_dir):
        a = create_state(profiles_dir, "a")
        (profiles_dir / f".this.{os.getpid()}").symlink_to(profiles_dir / "gone")
        assert store.set_current(a) == a
        assert not (profiles_dir / f".this.{os.getpid()}").exists()
        assert not (profiles_dir / f".this.{os.getpid()}").is_symlink()

    def test_require_current_without_pointer(self, store):
        with pytest.raises(StateIntegrityError, match="Invalid state"):
            store.require_current()


class TestResolvePath:
    def test_rooted(self, store, profiles_dir):
        base = create_state(profiles_dir, "a/b")
        create_state(profiles_dir, "x/y")
        assert store.resolve_path(base, "/x/y") == profiles_dir / "x" / "y"

    def test_relative(self, store, profiles_dir):
        base = create_state(profiles_dir, "a/b")
        create_state(profiles_dir, "a/c")
        assert store.resolve_path(base, "../c") == profiles_dir / "a" / "c"

    def test_symlink_loop_does_not_raise(self, store, profiles_dir):
        base = create_state(profiles_dir, "a")
        (base / "loop").symlink_to("loop")
        resolved = store.resolve_path(base, "loop")
        assert resolved.parent == base
        assert not resolved.is_dir()

    def test_nonexistent_target_still_resolves(self, store, profiles_dir):
        base = create_state(profiles_dir, "a")
        assert store.resolve_path(base, "/nope") == profiles_dir / "nope"

    def test_display_name(self, store, profiles_dir):
        assert store.display_name(profiles_dir / "gimp" / "paint") == "gimp/paint"
        assert store.display_name(profiles_dir) == "."


class TestLoadState:
    def test_bindings_and_files(self, store, profiles_dir):
        state_dir = create_state(
            profiles_dir,
            "gimp",
            {"1-brush:b": "", "2-undo:ctrl+z": "", "1.png": b"png", "1.raw": b"raw", "notes.txt": ""},
            status=2,
        )
        make_script(state_dir / "3-launch", "exit 0")
        make_script(state_dir / "_init", "exit 0")
        create_state(profiles_dir, "gimp/4-next")

        state = store.load_state(state_dir)

        assert state.path == state_dir
        assert sorted(state.bindings) == [1, 2, 3, 4]
        assert state.matches(1)[0].keys == ["b"]
        assert state.matches(3)[0].executable is True
        assert state.matches(4)[0].is_dir is True
        assert state.matches(4)[0].executable is False
        assert state.init_hook == state_dir / "_init"
        assert state.status == 2
        assert state.images == {1: state_dir / "1.png"}
        assert state.icons == {1: state_dir / "1.raw"}

    def test_symlinked_binding_to_directory(self, store, profiles_dir):
        target = create_state(profiles_dir, "other")
        state_dir = create_state(profiles_dir, "main")
        link(state_dir / "5-other", target)
        binding = store.load_state(state_dir).matches(5)[0]
        assert binding.is_dir is True

    def test_non_executable_init_ignored(self, store, profiles_dir):
        state_dir = create_state(profiles_dir, "s", {"_init": "#!/bin/sh\n"})
        assert store.load_state(state_dir).init_hook is None

    @pytest.mark.parametrize("raw", ["abc", "0", "4", "-1", ""])
    def test_invalid_status_is_off(self, store, profiles_dir, raw):
        state_dir = create_state(profiles_dir, "s", {"_status": raw})
        assert store.load_state(state_dir).status is None

    def test_status_whitespace_tolerated(self, store, profiles_dir):
        state_dir = create_state(profiles_dir, "s", {"_status": "  3\n\n"})
        assert store.load_state(state_dir).status == 3

    def test_invalid_status_logs_warning(self, store, profiles_dir, caplog):
        state_dir = create_state(profiles_dir, "s", {"_status": "9"})
        with caplog.at_level("WARNING"):
            store.load_state(state_dir)
        assert "out-of-range" in caplog.text

    def test_ambiguous_bindings_kept(self, store, profiles_dir):
        state_dir = create_state(profiles_dir, "s", {"1-a:a": "", "1-b:b": ""})
        assert [b.name for b in store.load_state(state_dir).matches(1)] == ["1-a:a", "1-b:b"]

    def test_icon_names_outside_range_ignored(self, store, profiles_dir):
        state_dir = create_state(profiles_dir, "s", {"0.png": b"", "9.raw": b"", "10.png": b""})
        state = store.load_state(state_dir)
        assert state.images == {}
        assert state.icons == {}


class TestProfileRoot:
    def test_exists(self, store, tmp_path):
        assert store.exists() is True
        assert StateStore(tmp_path / "missing").exists() is False

    def test_lefthanded_marker(self, store, profiles_dir):
        assert store.is_lefthanded() is False
        touch(profiles_dir / "_lefthanded")
        assert store.is_lefthanded() is True
