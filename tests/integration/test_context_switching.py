"""Integration tests: arrangements saved and restored across context switches."""

import pytest

from viewport_layout.core.workspace import Workspace
from viewport_layout.errors import UnsupportedOperationError
from viewport_layout.models import FractionalRect, ScreenRect, SplitDirection

DESKTOP = ScreenRect(width=1920, height=1080)
TABLET = ScreenRect(width=800, height=1200)
WALL = ScreenRect(width=3840, height=2160)


@pytest.fixture
def workspace(id_generator, emitter):
    return Workspace(id_generator, emitter)


def _arrangement(workspace):
    return [(v.id, v.fractional_rect) for v in workspace.get_viewports()]


class TestRoundTrip:
    """Switching A -> B -> A restores A exactly."""

    def test_desktop_tablet_desktop(self, workspace):
        """Test the split arrangement survives a trip through a new context."""
        workspace.set_surface(DESKTOP)
        original = workspace.get_viewports()[0]
        workspace.split_viewport(original, SplitDirection.DOWN)
        before = _arrangement(workspace)
        assert len(before) == 2

        workspace.set_surface(TABLET)
        tablet_viewports = workspace.get_viewports()
        assert len(tablet_viewports) == 1
        assert tablet_viewports[0].is_default
        assert tablet_viewports[0].fractional_rect == FractionalRect()
        assert tablet_viewports[0].id not in {vid for vid, _ in before}

        workspace.set_surface(DESKTOP)
        assert _arrangement(workspace) == before
        assert [v.absolute_rect.as_tuple() for v in workspace.get_viewports()] == [
            (0, 0, 1920, 540),
            (0, 540, 1920, 540),
        ]

    def test_second_context_remembers_its_own_arrangement(self, workspace):
        workspace.set_surface(DESKTOP)
        workspace.set_surface(TABLET)
        tablet_default = workspace.get_viewports()[0]
        workspace.split_viewport(tablet_default, SplitDirection.RIGHT)
        tablet_arrangement = _arrangement(workspace)

        workspace.set_surface(DESKTOP)
        workspace.set_surface(TABLET)

        assert _arrangement(workspace) == tablet_arrangement

    def test_repeated_round_trips_are_stable(self, workspace):
        workspace.set_surface(DESKTOP)
        workspace.split_viewport(workspace.get_viewports()[0], SplitDirection.RIGHT)
        before = _arrangement(workspace)
        for _ in range(3):
            workspace.set_surface(TABLET)
            workspace.set_surface(DESKTOP)
        assert _arrangement(workspace) == before
        assert len(workspace.contexts()) == 2


class TestPropagation:
    """New content is recorded in every registered context by area."""

    def test_created_on_large_is_minimized_on_small(self, workspace):
        """Test a viewport created on the desktop is hidden on the smaller tablet."""
        workspace.set_surface(TABLET)
        workspace.set_surface(DESKTOP)
        extra = workspace.create_viewport(FractionalRect(x=0.75, y=0, width=0.25, height=0.25))

        tablet = workspace.context_registry.get("portrait-sm-800x1200")
        stored = {s.id: s for s in workspace.get_snapshots_for_context(tablet.id)}
        assert stored[extra.id].is_minimized
        assert stored[extra.id].fractional_rect is None

        workspace.set_surface(TABLET)
        assert extra.id not in [v.id for v in workspace.get_viewports()]

        with pytest.raises(UnsupportedOperationError):
            workspace.restore_viewport(extra.id)

    def test_created_on_small_is_visible_on_large(self, workspace):
        """Test a viewport created on the tablet appears on the larger wall display."""
        workspace.set_surface(WALL)
        workspace.set_surface(TABLET)
        extra = workspace.create_viewport(FractionalRect(x=0, y=0.5, width=1, height=0.5))

        workspace.set_surface(WALL)
        ids = [v.id for v in workspace.get_viewports()]
        assert extra.id in ids
        assert workspace.find_viewport(extra.id).fractional_rect == FractionalRect(x=0, y=0.5, width=1, height=0.5)

    def test_split_narrows_source_in_larger_context(self, workspace):
        """Test splitting a shared viewport keeps larger contexts non-overlapping."""
        workspace.set_surface(WALL)
        workspace.set_surface(TABLET)
        shared = workspace.create_viewport(FractionalRect(x=0, y=0.5, width=1, height=0.5))

        new = workspace.split_viewport(shared.id, SplitDirection.RIGHT)

        workspace.set_surface(WALL)
        rects = {v.id: v.fractional_rect for v in workspace.get_viewports()}
        assert rects[shared.id] == FractionalRect(x=0, y=0.5, width=0.5, height=0.5)
        assert rects[new.id] == FractionalRect(x=0.5, y=0.5, width=0.5, height=0.5)

    def test_remove_applies_to_every_context(self, workspace):
        workspace.set_surface(WALL)
        workspace.set_surface(TABLET)
        extra = workspace.create_viewport(FractionalRect(x=0, y=0.5, width=1, height=0.5))
        workspace.set_surface(WALL)
        assert workspace.has_viewport(extra.id)

        assert workspace.remove_viewport(extra.id)
        workspace.set_surface(TABLET)
        assert not workspace.has_viewport(extra.id)

    def test_user_minimized_viewport_can_be_restored_after_switch(self, workspace):
        """Test a viewport minimized by the user stays stored and comes back on restore."""
        workspace.set_surface(DESKTOP)
        first = workspace.get_viewports()[0]
        second = workspace.split_viewport(first, SplitDirection.DOWN)
        workspace.minimize_viewport(second)

        workspace.set_surface(TABLET)
        workspace.set_surface(DESKTOP)
        assert not workspace.has_viewport(second.id)

        assert workspace.restore_viewport(second.id)
        restored = workspace.find_viewport(second.id)
        assert restored.fractional_rect == FractionalRect(x=0, y=0.5, width=1, height=0.5)
        assert not restored.is_minimized
