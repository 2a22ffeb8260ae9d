"""Integration tests: persisting a workspace to a document and restoring it."""

import json

import pytest

from viewport_layout.core.factory import WorkspaceFactory
from viewport_layout.core.ids import SequentialIdGenerator
from viewport_layout.core.workspace import Workspace, WorkspaceState
from viewport_layout.errors import ErrorCode, InvalidArgumentError
from viewport_layout.models import FractionalRect, LayoutEventType, ScreenRect, SplitDirection, WorkspaceDocument

DESKTOP = ScreenRect(width=1920, height=1080)
TABLET = ScreenRect(width=800, height=1200)


@pytest.fixture
def populated(id_generator, emitter):
    """Workspace with a split desktop arrangement and a visited tablet context."""
    workspace = Workspace(id_generator, emitter, workspace_id="ws-1", name="Main")
    workspace.set_surface(DESKTOP)
    workspace.split_viewport(workspace.get_viewports()[0], SplitDirection.RIGHT)
    workspace.set_surface(TABLET)
    workspace.set_surface(DESKTOP)
    return workspace


class TestToDocument:
    """Tests for to_document()."""

    def test_document_shape(self, populated):
        document = populated.to_document()
        data = json.loads(document.to_json())

        assert data["id"] == "ws-1"
        assert data["name"] == "Main"
        contexts = {c["id"]: c for c in data["workspaceContexts"]}
        desktop = contexts["landscape-lg-1920x1080"]
        assert desktop["maxScreenRect"]["width"] == 1920
        assert desktop["orientation"] == "landscape"
        assert desktop["breakpoint"] == "lg"
        assert desktop["sizeCategory"] == "large"
        assert desktop["deviceType"] == "large-laptop"
        assert desktop["minimumViewportWidth"] == 100
        assert [s["id"] for s in desktop["viewportSnapshots"]] == ["test-id-1", "test-id-2"]
        assert "fractionalRect" in desktop["viewportSnapshots"][0]
        assert "isMinimized" in desktop["viewportSnapshots"][0]

    def test_document_includes_live_edits(self, populated):
        """Test the current context is exported with its live arrangement."""
        first = populated.get_viewports()[0]
        populated.split_viewport(first, SplitDirection.DOWN)

        document = populated.to_document()
        desktop = document.find_context("landscape-lg-1920x1080")
        assert len(desktop.viewport_snapshots) == 3


class TestFromDocument:
    """Tests for Workspace.from_document()."""

    def test_contexts_registered_before_surface(self, populated):
        """Test every context and its snapshots exist before any surface is applied."""
        document = populated.to_document()
        restored = Workspace.from_document(document, SequentialIdGenerator("restored"))

        assert restored.state is WorkspaceState.UNINITIALIZED
        assert restored.id == "ws-1"
        assert sorted(c.key for c in restored.contexts()) == [
            "landscape-lg-1920x1080",
            "portrait-sm-800x1200",
        ]
        snapshots = restored.snapshot_store.get_snapshots_for_context("landscape-lg-1920x1080")
        assert [s.id for s in snapshots] == ["test-id-1", "test-id-2"]

    def test_surface_restores_saved_arrangement(self, populated):
        before = [(v.id, v.fractional_rect) for v in populated.get_viewports()]
        document = WorkspaceDocument.from_json(populated.to_document().to_json())

        restored = Workspace.from_document(document, SequentialIdGenerator("restored"), surface=DESKTOP)

        assert restored.state is WorkspaceState.ACTIVE
        assert [(v.id, v.fractional_rect) for v in restored.get_viewports()] == before

    def test_unknown_surface_gets_default(self, populated):
        document = populated.to_document()
        restored = Workspace.from_document(
            document, SequentialIdGenerator("restored"), surface=ScreenRect(width=1280, height=800)
        )
        viewports = restored.get_viewports()
        assert [v.id for v in viewports] == ["restored-1"]
        assert viewports[0].is_default

    def test_accepts_json_and_dict(self, populated):
        text = populated.to_document().to_json()
        from_text = Workspace.from_document(text, SequentialIdGenerator())
        from_dict = Workspace.from_document(json.loads(text), SequentialIdGenerator())
        assert len(from_text.contexts()) == len(from_dict.contexts()) == 2

    def test_custom_context_ids(self, id_generator):
        """Test documents may name contexts with their own ids."""
        document = WorkspaceDocument.model_validate({
            "id": "ws",
            "workspaceContexts": [{
                "id": "office",
                "name": "Office monitor",
                "maxScreenRect": {"x": 0, "y": 0, "width": 1920, "height": 1080},
                "viewportSnapshots": [
                    {"id": "editor", "fractionalRect": {"x": 0, "y": 0, "width": 0.5, "height": 1}},
                    {"id": "terminal", "fractionalRect": {"x": 0.5, "y": 0, "width": 0.5, "height": 1}},
                    {"id": "chat", "isMinimized": True},
                ],
            }],
        })
        workspace = Workspace.from_document(document, id_generator, surface=DESKTOP)

        assert workspace.current_context().id == "office"
        assert workspace.current_context().name == "Office monitor"
        assert [v.id for v in workspace.get_viewports()] == ["editor", "terminal"]

    def test_mismatched_descriptor_is_recomputed(self, id_generator, caplog):
        """Test stale descriptor fields are replaced by classification, with a warning."""
        document = {
            "id": "ws",
            "workspaceContexts": [{
                "id": "ctx",
                "maxScreenRect": {"width": 1920, "height": 1080},
                "deviceType": "tablet",
                "breakpoint": "sm",
            }],
        }
        with caplog.at_level("WARNING", logger="viewport_layout"):
            workspace = Workspace.from_document(document, id_generator)

        context = workspace.contexts()[0]
        assert context.layout.device_type.value == "large-laptop"
        assert context.layout.breakpoint.value == "lg"
        assert "differs from classified" in caplog.text

    def test_new_viewports_skip_stored_ids(self, populated):
        """Test a fresh generator never reuses ids held by restored contexts."""
        document = populated.to_document()
        stored_desktop = [
            (s.id, s.fractional_rect)
            for s in document.find_context("landscape-lg-1920x1080").viewport_snapshots
        ]
        restored = Workspace.from_document(document, SequentialIdGenerator("test-id"))

        restored.set_surface(ScreenRect(width=1280, height=800))
        created = restored.create_viewport(FractionalRect(x=0.5, y=0, width=0.5, height=1))

        assert [v.id for v in restored.get_viewports()] == ["test-id-4", "test-id-5"]
        assert created.id == "test-id-5"
        desktop = restored.get_snapshots_for_context("landscape-lg-1920x1080")
        assert [(s.id, s.fractional_rect) for s in desktop[:2]] == stored_desktop
        assert desktop[2].id == "test-id-5"
        assert desktop[2].fractional_rect == created.fractional_rect

    def test_duplicate_context_keys_rejected(self, id_generator):
        """Test two entries classifying to the same key are refused."""
        document = {
            "id": "ws",
            "workspaceContexts": [
                {"id": "office", "maxScreenRect": {"width": 1920, "height": 1080},
                 "viewportSnapshots": [{"id": "a"}]},
                {"id": "home", "maxScreenRect": {"x": 100, "width": 1920, "height": 1080},
                 "viewportSnapshots": [{"id": "b"}]},
            ],
        }
        with pytest.raises(InvalidArgumentError) as exc_info:
            Workspace.from_document(document, id_generator)
        assert exc_info.value.code is ErrorCode.INVALID_DOCUMENT
        assert exc_info.value.context["ids"] == ["office", "home"]

    def test_invalid_document(self, id_generator):
        with pytest.raises(InvalidArgumentError) as exc_info:
            Workspace.from_document({"workspaceContexts": "nope"}, id_generator)
        assert exc_info.value.code is ErrorCode.INVALID_DOCUMENT

    def test_restore_emits_context_events(self, populated, emitter):
        factory = WorkspaceFactory(SequentialIdGenerator("restored"), emitter=emitter)
        emitter.events.clear()
        factory.from_document(populated.to_document())
        assert len(emitter.of_type(LayoutEventType.CONTEXT_CREATED)) == 2


class TestFactory:
    """WorkspaceFactory wiring."""

    def test_create_with_viewport(self, id_generator):
        factory = WorkspaceFactory(id_generator)
        workspace = factory.create_with_viewport(DESKTOP)
        assert [v.id for v in workspace.get_viewports()] == ["test-id-1"]

    def test_create_without_surface(self):
        workspace = WorkspaceFactory().create()
        assert workspace.state is WorkspaceState.UNINITIALIZED

    def test_default_ids_use_prefix(self):
        workspace = WorkspaceFactory().create(DESKTOP)
        assert workspace.get_viewports()[0].id.startswith("viewport-")
