from fulfillment.core.registry import HandlerRegistry


class AppState:
    def __init__(self) -> None:
        self.registry = HandlerRegistry()


state = AppState()
