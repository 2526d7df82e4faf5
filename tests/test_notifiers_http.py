import json

import pytest
import requests

from server_watcher.errors import ConfigError, NotifierError
from server_watcher.models import CheckResult
from server_watcher.notifiers import ifttt
from server_watcher.notifiers import (
    IftttParams,
    SimpleGet,
    SimpleParams,
    SimplePost,
    SimplePut,
    WebhookJson,
    WebhookValues,
    available_notifiers,
    build_notifier,
)

RESULT = CheckResult("ovh", ("22sk010", "22sk020", "22sk030"), ("22sk030",))
TWO = CheckResult("ovh", ("a b", "c&d"), ("a b", "c&d"))


def test_registry_lists_every_channel():
    assert available_notifiers() == [
        "email-sendmail",
        "email-smtp",
        "ifttt-webhook-json",
        "ifttt-webhook-values",
        "simple-get",
        "simple-post",
        "simple-put",
    ]
    with pytest.raises(ConfigError, match="Unknown notifier"):
        build_notifier("carrier-pigeon", None)


def test_simple_get_query_parameters(fake_session, response):
    session = fake_session([response()])
    notifier = SimpleGet(SimpleParams("https://hook.test/n", "provider", "servers"), session=session)

    notifier.send(TWO)

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("GET", "https://hook.test/n")
    assert kwargs["params"] == {"provider": "ovh", "servers": "a b,c&d"}
    prepared = requests.Request(method, url, params=kwargs["params"]).prepare()
    assert prepared.url == "https://hook.test/n?provider=ovh&servers=a+b%2Cc%26d"


def test_simple_get_requires_parameter_names():
    with pytest.raises(ConfigError, match="SIMPLE_GET_PARAM_NAME_SERVERS"):
        SimpleGet(SimpleParams("https://hook.test/n", "provider", None))
    with pytest.raises(ConfigError, match="SIMPLE_URL"):
        SimpleGet(SimpleParams(None, "provider", "servers"))


@pytest.mark.parametrize("cls,method", [(SimplePost, "POST"), (SimplePut, "PUT")])
def test_simple_body_is_compact_json(cls, method, fake_session, response):
    session = fake_session([response()])
    cls(SimpleParams("https://hook.test/n"), session=session).send(RESULT)

    sent_method, url, kwargs = session.calls[0]
    assert sent_method == method
    assert kwargs["data"] == b'{"provider_name":"ovh","available_servers":["22sk030"]}'
    assert kwargs["headers"]["Content-Type"] == "application/json"


def test_simple_post_failure_names_channel(fake_session, response):
    session = fake_session([response(500, text="boom")])
    with pytest.raises(NotifierError) as exc:
        SimplePost(SimpleParams("https://hook.test/n"), session=session).send(RESULT)
    assert exc.value.channel == "simple-post"
    assert "500" in str(exc.value)


def test_simple_post_transport_failure(fake_session):
    session = fake_session([requests.ConnectionError("refused")])
    with pytest.raises(NotifierError, match="refused"):
        SimplePost(SimpleParams("https://hook.test/n"), session=session).send(RESULT)


def test_ifttt_json_url_and_body(fake_session, response):
    session = fake_session([response(text="Congratulations!")])
    WebhookJson(IftttParams("server_up", "k3y"), session=session).send(RESULT)

    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "https://maker.ifttt.com/trigger/server_up/json/with/key/k3y")
    assert json.loads(kwargs["data"]) == {"provider_name": "ovh", "available_servers": ["22sk030"]}


def test_ifttt_values_body(fake_session, response):
    session = fake_session([response()])
    WebhookValues(IftttParams("server_up", "k3y"), session=session).send(TWO)

    method, url, kwargs = session.calls[0]
    assert url == "https://maker.ifttt.com/trigger/server_up/with/key/k3y"
    assert kwargs["data"] == b'{"value1":"ovh","value2":"a b,c&d"}'


def test_ifttt_client_error_messages(fake_session, response):
    body = {"errors": [{"message": "You sent an invalid key."}, {"message": "Try again."}]}
    session = fake_session([response(401, json_body=body)])
    with pytest.raises(NotifierError, match="You sent an invalid key. / Try again."):
        WebhookJson(IftttParams("e", "bad"), session=session).send(RESULT)


def test_ifttt_server_error_is_unknown(fake_session, response):
    session = fake_session([response(502, text="bad gateway")])
    with pytest.raises(NotifierError, match="Unknown IFTTT-WEBHOOK error"):
        WebhookValues(IftttParams("e", "k"), session=session).send(RESULT)


def test_ifttt_requires_event_and_key():
    with pytest.raises(ConfigError, match="IFTTT_WEBHOOK_EVENT"):
        WebhookJson(IftttParams("", "k"))
    with pytest.raises(ConfigError, match="IFTTT_WEBHOOK_KEY"):
        WebhookValues(IftttParams("e", None))


def test_test_sends_dummy_result(fake_session, response):
    session = fake_session([response()])
    SimplePost(SimpleParams("https://hook.test/n"), session=session).test()
    payload = json.loads(session.calls[0][2]["data"])
    assert payload["provider_name"] == "dummy_provider"
    assert payload["available_servers"] == ["foo_server", "bar_server", "baz_server"]


def test_ifttt_variant_must_render_a_body():
    class NoBody(ifttt._IftttWebhook):
        name = "ifttt-nobody"
        url_template = ifttt.IFTTT_JSON_URL

    with pytest.raises(TypeError):
        NoBody(IftttParams("e", "k"))
