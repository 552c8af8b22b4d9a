from core.desktop.interface.focus import FocusController
from core.desktop.interface.interaction import Interaction, InteractionSurface, ItemRegion


def test_mount_reports_initial_value_once():
    seen = []
    focus = FocusController(True, on_focus_change=seen.append)
    surface = InteractionSurface()
    focus.mount(surface, ItemRegion("a"))
    focus.mount(surface, ItemRegion("a"))
    assert seen == [True]
    assert surface.listener_count == 1


def test_set_focus_notifies_only_on_change():
    seen = []
    focus = FocusController(False, on_focus_change=seen.append)
    focus.set_focus(False)
    focus.set_focus(True)
    focus.set_focus(True)
    assert seen == [True]


def test_editor_focus_can_only_grant_focus():
    focus = FocusController(False)
    focus.editor_focus_changed(True)
    assert focus.has_focus
    focus.editor_focus_changed(False)
    assert focus.has_focus


def test_outside_interaction_drops_focus():
    surface = InteractionSurface()
    focus = FocusController(True)
    focus.mount(surface, ItemRegion("a"))

    surface.dispatch(Interaction("mouse", owner="a"))
    assert focus.has_focus

    surface.dispatch(Interaction("mouse", owner="b"))
    assert not focus.has_focus


def test_unfocused_item_stays_unfocused_on_outside_interaction():
    seen = []
    surface = InteractionSurface()
    focus = FocusController(False, on_focus_change=seen.append)
    focus.mount(surface, ItemRegion("a"))
    surface.dispatch(Interaction("key", owner=None))
    assert seen == [False]


def test_attached_removes_listener_on_exit():
    surface = InteractionSurface()
    focus = FocusController(True)
    with focus.attached(surface, ItemRegion("a")):
        assert focus.mounted
        assert surface.listener_count == 1
    assert not focus.mounted
    assert surface.listener_count == 0
    surface.dispatch(Interaction("mouse", owner="b"))
    assert focus.has_focus
