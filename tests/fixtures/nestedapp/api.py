from autowire.markers import Managed, path
from outside.components import OutsideResource


class Api:
    @path("/inner")
    class InnerResource:
        pass

    class InnerManaged(Managed):
        def start(self):
            pass

        def stop(self):
            pass

    class Versions:
        @path("/v2")
        class V2Resource:
            pass

    External = OutsideResource


# Self reference, so the class body walk has a cycle to stop at.
Api.Self = Api
