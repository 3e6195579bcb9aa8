import math

import pytest
from camprompt.core.preset_adapter import PRESET_BUTTONS, PresetAdapter
from camprompt.core.prompt_mapper import derive_prompt
from camprompt.ui import prompt_bar as pb
from camprompt.ui.sidebar import Sidebar
from camprompt.viewers.camera.camera_state import CameraSnapshot, CameraState
from camprompt.viewers.camera.orbit_controller import OrbitSyncController
from camprompt.viewers.camera.orbit_surface import SphericalOrbitSurface


class NoClipboardApp:
    @staticmethod
    def clipboard():
        return None


@pytest.fixture
def adapter():
    return PresetAdapter(OrbitSyncController(SphericalOrbitSurface()))


@pytest.fixture
def sidebar(qtbot, adapter):
    widget = Sidebar(adapter)
    qtbot.addWidget(widget)
    adapter.controller.subscribe(widget.refresh)
    return widget


@pytest.fixture
def prompt_bar(qtbot):
    widget = pb.PromptBar(subject="robot")
    qtbot.addWidget(widget)
    return widget


# =====================================================
# Sidebar
# =====================================================

def test_sidebar_has_a_button_per_preset(sidebar):
    assert set(sidebar.buttons) == set(PRESET_BUTTONS)


def test_sidebar_initial_state(sidebar):
    checked = {key for key, button in sidebar.buttons.items() if button.isChecked()}
    assert checked == {"front", "eye_level", "full_shot"}
    assert sidebar.azimuth_slider.value() == 0
    assert sidebar.vertical_slider.value() == 0
    assert sidebar.distance_slider.value() == 9


def test_clicking_a_button_moves_camera(qtbot, sidebar, adapter):
    sidebar.buttons["close_up"].click()
    assert adapter.controller.state.distance == pytest.approx(3.0)
    assert sidebar.buttons["close_up"].isChecked()
    assert not sidebar.buttons["full_shot"].isChecked()
    assert sidebar.distance_slider.value() == 3


def test_clicking_active_button_keeps_it_checked(qtbot, sidebar):
    sidebar.buttons["front"].click()
    assert sidebar.buttons["front"].isChecked()


def test_slider_moves_camera(sidebar, adapter):
    sidebar.azimuth_slider.setValue(90)
    assert adapter.controller.state.azimuth == pytest.approx(math.pi / 2)
    assert sidebar.buttons["left"].isChecked()

    sidebar.vertical_slider.setValue(-45)
    assert adapter.controller.state.polar == pytest.approx(math.radians(135))
    assert sidebar.buttons["low_angle"].isChecked()


def test_refresh_does_not_issue_requests(sidebar, adapter):
    adapter.controller.report_orbit_change(math.pi, math.pi / 3, 5.0)
    # The sliders follow the published snapshot...
    assert sidebar.azimuth_slider.value() == 180
    assert sidebar.vertical_slider.value() == 30
    assert sidebar.distance_slider.value() == 5
    # ...without queueing a preset of their own.
    assert adapter.controller.pending_preset is None
    assert adapter.controller.surface.get_distance() == pytest.approx(5.0)


def test_refresh_rounds_distance_halves_up(sidebar):
    sidebar.refresh(CameraSnapshot.derive(CameraState(0.0, math.pi / 2, 2.5)))
    assert sidebar.distance_slider.value() == 3
    sidebar.refresh(CameraSnapshot.derive(CameraState(0.0, math.pi / 2, 4.5)))
    assert sidebar.distance_slider.value() == 5


def test_upload_button_emits(qtbot, sidebar):
    with qtbot.waitSignal(sidebar.imageRequested, timeout=1000):
        sidebar.upload_button.click()


def test_clear_button_enabled_with_image(sidebar):
    assert not sidebar.clear_button.isEnabled()
    sidebar.set_has_image(True)
    assert sidebar.clear_button.isEnabled()


# =====================================================
# PromptBar
# =====================================================

def test_display_prompt_order():
    text = pb.format_display_prompt(derive_prompt(0.0, math.pi / 2, 9.0))
    plain = text.replace('<span style="color:#f4f4f5">', "") \
        .replace('<span style="color:#71717a">', "").replace("</span>", "")
    assert plain == "long shot, eye-level shot, front view, (35mm lens)"


def test_display_prompt_escapes_html():
    parts = derive_prompt(0.0, 0.0, 9.0)
    assert "bird&#x27;s-eye" in pb.format_display_prompt(parts)


def test_full_prompt_uses_subject(prompt_bar):
    assert prompt_bar.full_prompt == ""
    prompt_bar.set_parts(derive_prompt(0.0, math.pi / 2, 9.0))
    assert prompt_bar.full_prompt == "long shot, eye-level shot, front view of robot, 35mm lens"
    prompt_bar.set_subject("")
    assert prompt_bar.full_prompt.endswith("front view of character, 35mm lens")


def test_copy_shows_feedback(qtbot, prompt_bar):
    prompt_bar.set_parts(derive_prompt(0.0, math.pi / 2, 9.0))
    with qtbot.waitSignal(prompt_bar.copied, timeout=1000) as blocker:
        prompt_bar.copy_button.click()
    assert blocker.args == ["long shot, eye-level shot, front view of robot, 35mm lens"]
    assert prompt_bar.copy_button.text() == pb.COPIED_LABEL
    qtbot.waitUntil(lambda: prompt_bar.copy_button.text() == pb.COPY_LABEL,
                    timeout=pb.COPIED_FEEDBACK_MS + 1000)


def test_copy_without_clipboard_notifies(qtbot, prompt_bar, monkeypatch, stub_notifier):
    monkeypatch.setattr(pb, "ErrorNotifier", stub_notifier)
    monkeypatch.setattr(pb, "QGuiApplication", NoClipboardApp)
    prompt_bar.set_parts(derive_prompt(0.0, math.pi / 2, 9.0))
    prompt_bar.copy_to_clipboard()
    assert stub_notifier.calls[0]["title"] == "Clipboard"
    assert prompt_bar.copy_button.text() == pb.COPY_LABEL
