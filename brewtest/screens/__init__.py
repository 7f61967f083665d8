from .base import (Alertable, InputScreen, NavigableScreen, Screen, Scrollable,
                   Tappable, Validatable)
from .basket import BasketScreen
from .checkout import CheckoutScreen
from .drink_detail import DrinkDetailScreen
from .home import DrinkCell, HomeScreen
from .login import LoginScreen
from .registration import RegistrationScreen

__all__ = [
    "Alertable", "InputScreen", "NavigableScreen", "Screen", "Scrollable",
    "Tappable", "Validatable",
    "BasketScreen", "CheckoutScreen", "DrinkDetailScreen", "DrinkCell",
    "HomeScreen", "LoginScreen", "RegistrationScreen",
]
