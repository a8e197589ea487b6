from .api import Api as Api
from .database import Database as Database
from .functions import Functions as Functions
from .layers import Layers as Layers
from .schedule import Schedule as Schedule
