from abc import ABC

from autowire.markers import Managed


class Database(Managed):
    def __init__(self):
        self.started = False

    def start(self):
        self.started = True

    def stop(self):
        self.started = False


class BaseRepository(Managed):
    """Leaves stop() to subclasses."""

    def start(self):
        pass


class CachedRepository(Managed, ABC):
    def start(self):
        pass

    def stop(self):
        pass
