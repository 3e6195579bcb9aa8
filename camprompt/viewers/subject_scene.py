"""VTK actors for the orbit subject: placeholder figure or uploaded image, rings and floor grid."""
from __future__ import annotations

import logging
import math
from pathlib import Path

import vtk

logger = logging.getLogger(__name__)

BACKGROUND = (0.035, 0.035, 0.043)
BODY_COLOR = (0.96, 0.96, 0.96)
ACCENT_COLOR = (0.89, 0.89, 0.91)
CHEEK_COLOR = (0.99, 0.65, 0.65)
EYE_COLOR = (0.15, 0.15, 0.16)
MOUTH_COLOR = (0.32, 0.32, 0.36)
EQUATOR_COLOR = (0.75, 0.09, 0.36)
MERIDIAN_COLOR = (0.05, 0.45, 0.56)
GRID_COLOR = (0.15, 0.15, 0.16)

RING_RADIUS = 5.0
IMAGE_SIZE = (3.0, 4.0)  # 3:4 portrait
GRID_HALF_EXTENT = 20.0
GRID_Y = -2.0


class SubjectLoadError(RuntimeError):
    """Raised when an image cannot be read as an orbit subject."""


def _actor(source: vtk.vtkAlgorithm, color, opacity: float = 1.0) -> vtk.vtkActor:
    mapper = vtk.vtkPolyDataMapper()
    mapper.SetInputConnection(source.GetOutputPort())
    actor = vtk.vtkActor()
    actor.SetMapper(mapper)
    prop = actor.GetProperty()
    prop.SetColor(*color)
    prop.SetOpacity(opacity)
    return actor


def _sphere(center, radius: float, color, opacity: float = 1.0, resolution: int = 32) -> vtk.vtkActor:
    source = vtk.vtkSphereSource()
    source.SetCenter(*center)
    source.SetRadius(radius)
    source.SetThetaResolution(resolution)
    source.SetPhiResolution(resolution)
    return _actor(source, color, opacity)


def _capsule(radius: float, length: float, color, resolution: int = 16) -> list[vtk.vtkActor]:
    """Capsule along Y centred on the origin."""
    cylinder = vtk.vtkCylinderSource()
    cylinder.SetRadius(radius)
    cylinder.SetHeight(length)
    cylinder.SetResolution(resolution)
    cylinder.CappingOff()
    return [
        _actor(cylinder, color),
        _sphere((0.0, length / 2, 0.0), radius, color, resolution=resolution),
        _sphere((0.0, -length / 2, 0.0), radius, color, resolution=resolution),
    ]


def _assembly(parts: list[vtk.vtkProp3D], position=(0.0, 0.0, 0.0),
              rotation_z_deg: float = 0.0) -> vtk.vtkAssembly:
    assembly = vtk.vtkAssembly()
    for part in parts:
        assembly.AddPart(part)
    assembly.SetPosition(*position)
    assembly.RotateZ(rotation_z_deg)
    return assembly


def _limb(position, rotation_z_deg: float, capsule_radius: float, capsule_length: float,
          capsule_y: float, end_center, end_radius: float) -> vtk.vtkAssembly:
    segment = _assembly(_capsule(capsule_radius, capsule_length, BODY_COLOR), (0.0, capsule_y, 0.0))
    end = _sphere(end_center, end_radius, ACCENT_COLOR, resolution=16)
    return _assembly([segment, end], position, rotation_z_deg)


def build_placeholder_figure() -> vtk.vtkAssembly:
    """A small humanoid standing on the orbit target, facing +Z."""
    parts: list[vtk.vtkProp3D] = [
        _sphere((0.0, 1.2, 0.0), 0.55, BODY_COLOR),
        _sphere((0.18, 1.25, 0.45), 0.1, EYE_COLOR, resolution=16),
        _sphere((-0.18, 1.25, 0.45), 0.1, EYE_COLOR, resolution=16),
        _sphere((0.22, 1.3, 0.52), 0.03, (1.0, 1.0, 1.0), resolution=8),
        _sphere((-0.14, 1.3, 0.52), 0.03, (1.0, 1.0, 1.0), resolution=8),
        _sphere((0.35, 1.1, 0.38), 0.08, CHEEK_COLOR, opacity=0.6, resolution=16),
        _sphere((-0.35, 1.1, 0.38), 0.08, CHEEK_COLOR, opacity=0.6, resolution=16),
        _assembly(_capsule(0.35, 0.4, BODY_COLOR), (0.0, 0.35, 0.0)),
        # arms
        _limb((0.45, 0.45, 0.0), -math.degrees(0.5), 0.12, 0.25, 0.0, (0.08, -0.25, 0.0), 0.1),
        _limb((-0.45, 0.45, 0.0), math.degrees(0.5), 0.12, 0.25, 0.0, (-0.08, -0.25, 0.0), 0.1),
        # legs
        _limb((0.18, -0.15, 0.0), 0.0, 0.13, 0.2, -0.2, (0.0, -0.45, 0.05), 0.12),
        _limb((-0.18, -0.15, 0.0), 0.0, 0.13, 0.2, -0.2, (0.0, -0.45, 0.05), 0.12),
    ]

    smile_fn = vtk.vtkParametricTorus()
    smile_fn.SetRingRadius(0.12)
    smile_fn.SetCrossSectionRadius(0.025)
    smile_fn.SetMaximumU(math.pi)
    smile_source = vtk.vtkParametricFunctionSource()
    smile_source.SetParametricFunction(smile_fn)
    smile = _actor(smile_source, MOUTH_COLOR)
    smile.SetPosition(0.0, 1.0, 0.5)
    smile.RotateZ(180.0)
    smile.RotateX(math.degrees(0.3))
    parts.append(smile)

    return _assembly(parts)


def _ring(color, rotate_x: float = 0.0, rotate_y: float = 0.0) -> vtk.vtkActor:
    disk = vtk.vtkDiskSource()
    disk.SetInnerRadius(RING_RADIUS - 0.05)
    disk.SetOuterRadius(RING_RADIUS + 0.05)
    disk.SetCircumferentialResolution(128)
    actor = _actor(disk, color, opacity=0.6)
    actor.GetProperty().LightingOff()
    actor.RotateX(rotate_x)
    actor.RotateY(rotate_y)
    return actor


def _grid() -> vtk.vtkActor:
    plane = vtk.vtkPlaneSource()
    plane.SetOrigin(-GRID_HALF_EXTENT, GRID_Y, -GRID_HALF_EXTENT)
    plane.SetPoint1(GRID_HALF_EXTENT, GRID_Y, -GRID_HALF_EXTENT)
    plane.SetPoint2(-GRID_HALF_EXTENT, GRID_Y, GRID_HALF_EXTENT)
    plane.SetResolution(int(2 * GRID_HALF_EXTENT), int(2 * GRID_HALF_EXTENT))
    actor = _actor(plane, GRID_COLOR)
    actor.GetProperty().SetRepresentationToWireframe()
    actor.GetProperty().LightingOff()
    return actor


class SubjectScene:
    """
    Owns the scene actors of an OrbitViewer renderer.

    The placeholder figure is shown until an image is loaded; the image is
    drawn on a fixed 3:4 plane facing the front direction.
    """

    def __init__(self, renderer: vtk.vtkRenderer) -> None:
        self.renderer = renderer
        self.figure = build_placeholder_figure()
        self.image_actor: vtk.vtkActor | None = None
        self.image_path: Path | None = None

        self.renderer.SetBackground(*BACKGROUND)
        self._add_lights()
        self.renderer.AddActor(_grid())
        self.renderer.AddActor(_ring(EQUATOR_COLOR, rotate_x=-90.0))
        self.renderer.AddActor(_ring(MERIDIAN_COLOR, rotate_y=90.0))
        self.renderer.AddActor(self.figure)

    def _add_lights(self) -> None:
        key = vtk.vtkLight()
        key.SetPositional(True)
        key.SetPosition(10.0, 10.0, 10.0)
        key.SetFocalPoint(0.0, 0.0, 0.0)
        key.SetIntensity(1.0)
        key.SetLightTypeToSceneLight()

        rim = vtk.vtkLight()
        rim.SetPositional(True)
        rim.SetPosition(-10.0, -10.0, -10.0)
        rim.SetFocalPoint(0.0, 0.0, 0.0)
        rim.SetColor(0.5, 0.0, 0.5)
        rim.SetIntensity(0.5)
        rim.SetLightTypeToSceneLight()

        self.renderer.AddLight(key)
        self.renderer.AddLight(rim)

    @property
    def has_image(self) -> bool:
        return self.image_actor is not None

    def load_image(self, path: str | Path) -> None:
        """Show the image at ``path`` in place of the placeholder figure."""
        path = Path(path)
        if not path.is_file():
            raise SubjectLoadError(f"Image not found: {path}")

        reader = vtk.vtkImageReader2Factory.CreateImageReader2(str(path))
        if reader is None:
            raise SubjectLoadError(f"Unsupported image format: {path.name}")
        reader.SetFileName(str(path))
        reader.Update()
        if reader.GetOutput().GetNumberOfPoints() == 0:
            raise SubjectLoadError(f"Could not read image: {path.name}")

        texture = vtk.vtkTexture()
        texture.SetInputConnection(reader.GetOutputPort())
        texture.InterpolateOn()

        width, height = IMAGE_SIZE
        plane = vtk.vtkPlaneSource()
        plane.SetOrigin(-width / 2, -height / 2, 0.0)
        plane.SetPoint1(width / 2, -height / 2, 0.0)
        plane.SetPoint2(-width / 2, height / 2, 0.0)

        actor = _actor(plane, (1.0, 1.0, 1.0))
        actor.SetTexture(texture)
        actor.GetProperty().LightingOff()

        self.clear_image()
        self.image_actor = actor
        self.image_path = path
        self.renderer.AddActor(actor)
        self.figure.VisibilityOff()
        logger.info("Subject image loaded: %s", path)

    def clear_image(self) -> None:
        if self.image_actor is not None:
            self.renderer.RemoveActor(self.image_actor)
            logger.info("Subject image cleared: %s", self.image_path)
        self.image_actor = None
        self.image_path = None
        self.figure.VisibilityOn()

    def animate(self, elapsed: float) -> None:
        """Idle sway and bob of the placeholder; the camera is not touched."""
        self.figure.SetOrientation(0.0, math.degrees(math.sin(elapsed * 0.5) * 0.4), 0.0)
        self.figure.SetPosition(0.0, math.sin(elapsed * 2.0) * 0.05, 0.0)
