from lanshare.constants import PROGRAM_VERSION

__version__ = PROGRAM_VERSION
