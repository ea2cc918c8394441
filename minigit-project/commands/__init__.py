# This file makes the 'commands' directory a Python package
# Importing command modules from here

from . import init
from . import add
from . import commit
from . import status
from . import log
from . import branch
from . import reset
from . import config
