"""Import classes used to coordinate work across threads."""

from .shared_lock import SharedLock as SharedLock
