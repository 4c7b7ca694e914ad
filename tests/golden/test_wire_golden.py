from gawire.client.collector import GaCollector
from gawire.core.events import Client, Consent, Context, Event, EventType, PageData, Session, TrackData, UserData
from gawire.utils.ids import hash_to_nine_digits


class _Rng:
    def randint(self, a: int, b: int) -> int:
        return 123456789


def _context(visitor_id: str) -> Context:
    return Context(
        user=UserData(visitor_id=visitor_id),
        client=Client(locale="fr", screen_width=1024, screen_height=768),
        session=Session(session_id="s1", session_count=2, session_start=True, first_seen=100, last_seen=200),
    )


def test_golden_nine_digit_hashes() -> None:
    assert hash_to_nine_digits("00000000-0000-0000-0000-000000000000") == "151760947"
    assert hash_to_nine_digits("be9f76b3-2c50-4d12-b14c-85c343745691") == "108670052"


def test_golden_page_view_query() -> None:
    event = Event(
        uuid="evt-1",
        event_type=EventType.PAGE,
        data=PageData(
            name="home",
            title="Hello World",
            url="https://example.com/a",
            search="?q=1",
            properties=[("plan name", "gold"), ("age", "30"), ("currency", "USD")],
        ),
        context=_context("abc"),
        consent=Consent.GRANTED,
    )
    request = GaCollector({"ga_measurement_id": "G-TEST"}, rng=_Rng()).page(event)

    assert request.url == (
        "https://www.google-analytics.com/g/collect?"
        "v=2&tid=G-TEST&_p=123456789&sr=1024x768&ul=fr&cid=abc&_s=1"
        "&dl=https%3A%2F%2Fexample.com%2Fa%3Fq%3D1&dt=Hello%20World&en=page_view"
        "&ep.event_id=evt-1&ep.page_name=home&ep.page_search=%3Fq%3D1&ep.plan_name=gold&epn.age=30"
        "&_ee=1&sid=s1&sct=2&seg=0&_ss=1"
        "&gcs=G111&gcd=13t3t3t2t5l1&npa=0&dma_cps=syphamo&dma=1&pscdl=noapi&cu=USD"
    )


def test_golden_track_query_with_items() -> None:
    event = Event(
        uuid="evt-2",
        event_type=EventType.TRACK,
        data=TrackData(
            name="purchase",
            properties=[("value", "19.90")],
            products=[
                [("sku", "123456"), ("name", "Tshirt"), ("brand", "Thyngster"), ("category", "men"), ("price", "129.99")],
                [("sku", "789"), ("currency", "JPY"), ("stock", "yes")],
            ],
        ),
        context=_context("be9f76b3-2c50-4d12-b14c-85c343745691"),
    )
    request = GaCollector({"ga_measurement_id": "G-TEST"}, rng=_Rng()).track(event)

    assert "&cid=108670052.100&" in request.url
    assert "&en=purchase&ep.event_id=evt-2&epn.value=19.9&" in request.url
    assert "&gcs=G101&gcd=13p3t3p2p5l1&npa=1&dma_cps=-&dma=1&pscdl=denied" in request.url
    assert request.url.endswith(
        "&pr1=id123456~nmTshirt~brThyngster~camen~pr129.99&pr2=id789~k0currency~v0JPY~k1stock~v1yes"
    )
