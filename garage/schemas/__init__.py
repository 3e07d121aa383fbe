# Schemas package (re-export feature modules for stable imports)
from .catalog.motorcycle import *
from .uploads.upload import *
from .common.common import *
