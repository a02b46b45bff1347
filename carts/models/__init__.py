from .product import *
from .order import *
