"""
Tests for the FastAPI application in main.

Requests run through starlette's TestClient; background searches run on the
client's event loop, so tests poll /api/state until the controllers settle.
"""

import time
import unittest

from fastapi.testclient import TestClient

from support import LATO_PAIRING, SAMPLE_SNIPPETS, FakeGenerator, NeverGenerator

from config import ConfigurationError, Settings
from generation import GenerationError, PAIRING_FAILED_MESSAGE
from main import create_app


def make_settings(**overrides):
    values = {"gemini_api_key": "test-key", "default_font": "Lato"}
    values.update(overrides)
    return Settings(_env_file=None, **values)


def wait_for_state(client, predicate, attempts=200):
    for _ in range(attempts):
        state = client.get("/api/state").json()
        if predicate(state):
            return state
        time.sleep(0.01)
    raise AssertionError(f"state never settled: {state}")


def settled(state):
    return state["pairing"]["status"] != "loading" and state["snippets"]["status"] != "loading"


class TestStartup(unittest.TestCase):
    def test_startup_searches_default_font(self):
        generator = FakeGenerator()
        app = create_app(make_settings(), generator=generator)

        with TestClient(app) as client:
            state = wait_for_state(client, settled)

        self.assertEqual(generator.pairing_calls, ["Lato"])
        self.assertEqual(state["pairing"]["status"], "success")
        self.assertEqual(state["pairing"]["result"]["headline"]["name"], "Oswald")
        self.assertEqual(state["snippets"]["status"], "ready")
        self.assertEqual(state["snippets"]["active_tab"], "css")

    def test_missing_api_key_aborts_startup(self):
        app = create_app(make_settings(gemini_api_key=""))
        with self.assertRaises(ConfigurationError):
            with TestClient(app):
                pass

    def test_dark_mode_seeded_from_settings(self):
        app = create_app(make_settings(prefers_color_scheme="dark"), generator=FakeGenerator(), autostart=False)
        with TestClient(app) as client:
            state = client.get("/api/state").json()
        self.assertTrue(state["dark_mode"])
        self.assertFalse(state["preview_dark_mode"])


class TestJsonApi(unittest.TestCase):
    def setUp(self):
        self.generator = FakeGenerator()
        self.app = create_app(make_settings(), generator=self.generator, autostart=False)

    def test_health(self):
        with TestClient(self.app) as client:
            response = client.get("/health")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["status"], "healthy")

    def test_search_accepted(self):
        with TestClient(self.app) as client:
            response = client.post("/api/search", json={"font_name": "Lato"})
            self.assertEqual(response.status_code, 202)
            body = response.json()
            self.assertTrue(body["accepted"])
            self.assertEqual(body["state"]["pairing"]["status"], "loading")

            state = wait_for_state(client, settled)

        self.assertEqual(state["pairing"]["result"], LATO_PAIRING.model_dump(mode="json"))
        self.assertEqual(
            [link["id"] for link in state["font_links"]],
            ["font-Lato-400", "font-Oswald-700", "font-Playfair-Display-600"],
        )

    def test_blank_search_not_accepted(self):
        with TestClient(self.app) as client:
            body = client.post("/api/search", json={"font_name": "   "}).json()
        self.assertFalse(body["accepted"])
        self.assertEqual(body["state"]["pairing"]["status"], "idle")
        self.assertEqual(self.generator.pairing_calls, [])

    def test_search_while_loading_not_accepted(self):
        app = create_app(make_settings(), generator=NeverGenerator())
        with TestClient(app) as client:
            body = client.post("/api/search", json={"font_name": "Roboto"}).json()
        self.assertFalse(body["accepted"])
        self.assertEqual(body["state"]["pairing"]["input_font"], "Lato")

    def test_font_name_length_limit(self):
        with TestClient(self.app) as client:
            response = client.post("/api/search", json={"font_name": "x" * 101})
        self.assertEqual(response.status_code, 422)

    def test_failed_search_reports_error(self):
        self.generator.pairing_error = GenerationError(PAIRING_FAILED_MESSAGE)
        with TestClient(self.app) as client:
            client.post("/api/search", json={"font_name": "Lato"})
            state = wait_for_state(client, settled)
        self.assertEqual(state["pairing"]["status"], "failed")
        self.assertEqual(state["pairing"]["error"], PAIRING_FAILED_MESSAGE)
        self.assertEqual(state["snippets"]["status"], "idle")

    def test_theme_toggles(self):
        with TestClient(self.app) as client:
            self.assertTrue(client.post("/api/theme/toggle").json()["dark_mode"])
            state = client.post("/api/preview/theme/toggle").json()
        self.assertTrue(state["dark_mode"])
        self.assertTrue(state["preview_dark_mode"])

    def test_select_tab_and_copy(self):
        with TestClient(self.app) as client:
            client.post("/api/search", json={"font_name": "Lato"})
            wait_for_state(client, settled)

            state = client.post("/api/snippets/tab", json={"tab": "html"}).json()
            self.assertEqual(state["snippets"]["active_tab"], "html")

            response = client.post("/api/snippets/copy")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.json(), {"tab": "html", "text": SAMPLE_SNIPPETS.html, "copied": True})
            self.assertTrue(client.get("/api/state").json()["snippets"]["copied"])

    def test_invalid_tab_rejected(self):
        with TestClient(self.app) as client:
            response = client.post("/api/snippets/tab", json={"tab": "scss"})
        self.assertEqual(response.status_code, 422)

    def test_copy_without_snippets_conflicts(self):
        with TestClient(self.app) as client:
            response = client.post("/api/snippets/copy")
        self.assertEqual(response.status_code, 409)

    def test_download(self):
        with TestClient(self.app) as client:
            self.assertEqual(client.get("/api/snippets/css/download").status_code, 404)

            client.post("/api/search", json={"font_name": "Lato"})
            wait_for_state(client, settled)

            response = client.get("/api/snippets/tailwind/download")
            self.assertEqual(response.status_code, 200)
            self.assertEqual(response.text, SAMPLE_SNIPPETS.tailwind)
            self.assertIn('filename="tailwind.config.js"', response.headers["content-disposition"])

            self.assertEqual(client.get("/api/snippets/scss/download").status_code, 400)


class TestFormRoutes(unittest.TestCase):
    def setUp(self):
        self.generator = FakeGenerator()
        self.app = create_app(make_settings(), generator=self.generator, autostart=False)

    def test_index_renders(self):
        with TestClient(self.app) as client:
            response = client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("FontPairer", response.text)
        self.assertIn('name="font_name"', response.text)

    def test_search_form_redirects_and_searches(self):
        with TestClient(self.app) as client:
            response = client.post("/search", data={"font_name": "Lato"}, follow_redirects=False)
            self.assertEqual(response.status_code, 303)
            self.assertEqual(response.headers["location"], "/")

            wait_for_state(client, settled)
            page = client.get("/").text

        self.assertEqual(self.generator.pairing_calls, ["Lato"])
        self.assertIn("Pairing Rationale", page)
        self.assertIn("font-Oswald-700", page)

    def test_theme_forms(self):
        with TestClient(self.app) as client:
            client.post("/theme", follow_redirects=False)
            client.post("/preview/theme", follow_redirects=False)
            state = client.get("/api/state").json()
        self.assertTrue(state["dark_mode"])
        self.assertTrue(state["preview_dark_mode"])

    def test_tab_form(self):
        with TestClient(self.app) as client:
            response = client.post("/snippets/tab", data={"tab": "tailwind"}, follow_redirects=False)
            self.assertEqual(response.status_code, 303)
            self.assertEqual(client.get("/api/state").json()["snippets"]["active_tab"], "tailwind")

            response = client.post("/snippets/tab", data={"tab": "scss"}, follow_redirects=False)
            self.assertEqual(response.status_code, 400)

    def test_undecodable_form_body_rejected(self):
        headers = {"content-type": "application/x-www-form-urlencoded"}
        with TestClient(self.app) as client:
            for path in ("/search", "/snippets/tab"):
                response = client.post(path, content=b"font_name=%ff\xff\xfe", headers=headers, follow_redirects=False)
                self.assertEqual(response.status_code, 400, path)
            state = client.get("/api/state").json()
        self.assertEqual(state["pairing"]["status"], "idle")
        self.assertEqual(self.generator.pairing_calls, [])


class TestRateLimit(unittest.TestCase):
    def test_search_requests_are_limited(self):
        app = create_app(make_settings(rate_limit_burst=2), generator=FakeGenerator(), autostart=False)
        with TestClient(app) as client:
            codes = [client.post("/api/search", json={"font_name": "Lato"}).status_code for _ in range(3)]
            limited = client.post("/api/search", json={"font_name": "Lato"})
            state = client.get("/api/state")

        self.assertEqual(codes, [202, 202, 429])
        self.assertEqual(limited.status_code, 429)
        self.assertIn("retry-after", limited.headers)
        self.assertEqual(state.status_code, 200)

    def test_rotating_forwarded_for_is_still_limited(self):
        app = create_app(make_settings(rate_limit_burst=2), generator=FakeGenerator(), autostart=False)
        with TestClient(app) as client:
            codes = [
                client.post(
                    "/api/search",
                    json={"font_name": "Lato"},
                    headers={"X-Forwarded-For": f"10.0.0.{i}"},
                ).status_code
                for i in range(4)
            ]
        self.assertEqual(codes, [202, 202, 429, 429])

    def test_forwarded_for_honoured_when_trusted(self):
        app = create_app(
            make_settings(rate_limit_burst=1, trust_forwarded_for=True),
            generator=FakeGenerator(),
            autostart=False,
        )
        with TestClient(app) as client:
            first = client.post("/api/search", json={"font_name": "Lato"}, headers={"X-Forwarded-For": "10.0.0.1"})
            second = client.post("/api/search", json={"font_name": "Lato"}, headers={"X-Forwarded-For": "10.0.0.2"})
            repeat = client.post("/api/search", json={"font_name": "Lato"}, headers={"X-Forwarded-For": "10.0.0.1"})
        self.assertEqual([first.status_code, second.status_code, repeat.status_code], [202, 202, 429])


if __name__ == "__main__":
    unittest.main()
