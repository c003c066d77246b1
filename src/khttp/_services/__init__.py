from ._request_controller import CallState, Phase, RequestController

__all__ = ["CallState", "Phase", "RequestController"]
