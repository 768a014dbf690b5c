from lift.controller.controller import CarController
from lift.controller.dispatch import choose_direction, should_stop

__all__ = ["CarController", "choose_direction", "should_stop"]
