import logging
import os
import sys

# Add gawire to path so we can run directly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from gawire import Consent, Event, EventType, page
from gawire.core.events import Client, Context, PageData, Session, UserData

logging.basicConfig(level=logging.DEBUG)

page_data = PageData(
    title="Checkout",
    url="https://shop.example.com/checkout",
    search="?step=2",
    referrer="https://shop.example.com/cart",
    properties=[("page type", "checkout"), ("cart_value", "49.90"), ("currency", "EUR")],
)

event = Event(
    uuid="3c8a1f4e-6a0b-4f47-9f0e-2d7c1b9a5e11",
    event_type=EventType.PAGE,
    data=page_data,
    context=Context(
        page=page_data,
        user=UserData(visitor_id="be9f76b3-2c50-4d12-b14c-85c343745691"),
        client=Client(locale="fr-fr", screen_width=1512, screen_height=982, country_code="FR"),
        session=Session(session_id="1700000000", session_count=3, first_seen=1690000000, last_seen=1700000000),
    ),
    consent=Consent.GRANTED,
)

request = page(event, {"ga_measurement_id": "G-XXXXXXXXXX"})
print(request.method, request.url)
