"""
Example fulfillment handlers.

Run with ``python -m fulfillment`` after importing this module somewhere in
startup, or pass ``registry`` to ``create_app``.
"""

from fulfillment import Card, Platform, Suggestions, WebhookClient
from fulfillment.core.app_state import state

registry = state.registry


@registry.action("input.welcome")
def welcome(agent: WebhookClient) -> None:
    agent.add("Welcome to the weather agent!")
    agent.add(Suggestions(replies=["Weather in Rome", "Cancel"]))


@registry.action("weather.get")
async def weather(agent: WebhookClient) -> None:
    city = agent.parameters.get("city", "Rome")
    agent.add(f"It is sunny in {city}.")
    agent.add(
        Card(title=f"Weather in {city}", image_url="https://example.com/sun.png")
        .add_button("Forecast", "https://example.com/forecast")
    )
    agent.add(Suggestions(replies=["Tomorrow"], platform=Platform.ACTIONS_ON_GOOGLE))
    agent.set_context({"name": "weather", "lifespan": 2, "parameters": {"city": city}})


@registry.action(None)
def fallback(agent: WebhookClient) -> None:
    agent.add("I didn't get that. Can you say it again?")
