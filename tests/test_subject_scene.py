import math

import pytest
import vtk
from PySide6.QtGui import QImage, QColor

from camprompt.viewers.subject_scene import SubjectLoadError, SubjectScene


@pytest.fixture
def scene():
    return SubjectScene(vtk.vtkRenderer())


@pytest.fixture
def png_file(qapp, tmp_path):
    path = tmp_path / "subject.png"
    image = QImage(6, 8, QImage.Format_RGB32)
    image.fill(QColor("teal"))
    assert image.save(str(path))
    return path


def test_scene_contents(scene):
    # grid, two rings and the placeholder figure
    assert scene.renderer.GetActors().GetNumberOfItems() >= 3
    assert scene.renderer.GetViewProps().IsItemPresent(scene.figure)
    assert scene.renderer.GetLights().GetNumberOfItems() == 2
    assert not scene.has_image


def test_load_and_clear_image(scene, png_file):
    scene.load_image(png_file)
    assert scene.has_image
    assert scene.image_path == png_file
    assert scene.image_actor.GetTexture() is not None
    assert not scene.figure.GetVisibility()
    bounds = scene.image_actor.GetBounds()
    assert bounds[1] - bounds[0] == pytest.approx(3.0)
    assert bounds[3] - bounds[2] == pytest.approx(4.0)

    scene.clear_image()
    assert not scene.has_image
    assert scene.image_path is None
    assert scene.figure.GetVisibility()


def test_loading_twice_replaces_image(scene, png_file):
    scene.load_image(png_file)
    first = scene.image_actor
    scene.load_image(png_file)
    assert scene.image_actor is not first
    assert not scene.renderer.GetViewProps().IsItemPresent(first)


def test_missing_image(scene, tmp_path):
    with pytest.raises(SubjectLoadError, match="not found"):
        scene.load_image(tmp_path / "nope.png")
    assert not scene.has_image


def test_unsupported_image(scene, tmp_path):
    path = tmp_path / "notes.txt"
    path.write_text("not an image", encoding="utf-8")
    with pytest.raises(SubjectLoadError):
        scene.load_image(path)
    assert not scene.has_image


def test_animate_moves_only_the_figure(scene):
    scene.animate(math.pi / 4)
    x, y, z = scene.figure.GetPosition()
    assert y == pytest.approx(math.sin(math.pi / 2) * 0.05)
    assert scene.figure.GetOrientation()[1] == pytest.approx(
        math.degrees(math.sin(math.pi / 8) * 0.4), abs=1e-6)
