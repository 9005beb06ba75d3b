from typing import Protocol

from autowire.markers import InjectableProvider, provider


@provider
class JsonErrorMapper:
    def to_response(self, error):
        return {"error": str(error)}


@provider
class ErrorMapper(Protocol):
    def to_response(self, error): ...


class JsonNegotiator(InjectableProvider):
    def get_injectable(self, context):
        return "application/json"


class BaseNegotiator(InjectableProvider):
    __abstract__ = True

    def get_injectable(self, context):
        return None
