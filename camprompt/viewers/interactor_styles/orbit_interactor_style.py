import math

from vtkmodules.vtkInteractionStyle import vtkInteractorStyleTrackballCamera

# Dolly factor per wheel notch.
WHEEL_DOLLY_SCALE = 0.9


class OrbitInteractorStyle(vtkInteractorStyleTrackballCamera):
    """
    Left drag orbits the camera around the target, the wheel dollies.
    Panning and the other trackball gestures are disabled.

    The style only moves the parent's orbit surface; rendering follows from
    the snapshot the orbit controller publishes.
    """
    def __init__(self, parent=None):
        super().__init__()
        self.parent = parent
        self._last_pos = None
        self._mode = False

        self.RemoveObservers("LeftButtonPressEvent")
        self.AddObserver("LeftButtonPressEvent", self.on_left_button_down)
        self.RemoveObservers("LeftButtonReleaseEvent")
        self.AddObserver("LeftButtonReleaseEvent", self.on_left_button_up)
        self.RemoveObservers("MouseMoveEvent")
        self.AddObserver("MouseMoveEvent", self.on_mouse_move)
        self.RemoveObservers("MouseWheelForwardEvent")
        self.AddObserver("MouseWheelForwardEvent", self.on_wheel_forward)
        self.RemoveObservers("MouseWheelBackwardEvent")
        self.AddObserver("MouseWheelBackwardEvent", self.on_wheel_backward)
        for event in ("MiddleButtonPressEvent", "MiddleButtonReleaseEvent",
                      "RightButtonPressEvent", "RightButtonReleaseEvent"):
            self.RemoveObservers(event)
            self.AddObserver(event, self.on_ignored)

    def on_left_button_down(self, obj, event):
        self._mode = 'rotate'
        self._last_pos = self.GetInteractor().GetEventPosition()

    def on_left_button_up(self, obj, event):
        self._mode = False
        self._last_pos = None

    def on_mouse_move(self, obj, event):
        if self._mode != 'rotate' or self._last_pos is None:
            return
        iren = self.GetInteractor()
        x, y = iren.GetEventPosition()
        lx, ly = self._last_pos
        self._last_pos = (x, y)
        height = max(iren.GetRenderWindow().GetSize()[1], 1)
        # A drag over the full viewport height is one full turn.
        factor = 2.0 * math.pi / height
        self.parent.surface.rotate(-(x - lx) * factor, (y - ly) * factor)

    def on_wheel_forward(self, obj, event):
        self.parent.surface.dolly(WHEEL_DOLLY_SCALE)

    def on_wheel_backward(self, obj, event):
        self.parent.surface.dolly(1.0 / WHEEL_DOLLY_SCALE)

    def on_ignored(self, obj, event):
        return
