from .given import GivenBuilder, GivenSteps
from .then import ThenSteps
from .when import WhenSteps

__all__ = ["GivenBuilder", "GivenSteps", "ThenSteps", "WhenSteps"]
