"""
Тесты запуска: адреса прослушивания и сборка приложения
"""

import unittest

from pydantic import ValidationError

from app.config import Settings
from app.main import create_app, parse_listener


class TestParseListener(unittest.TestCase):
    """Тесты разбора адресов LISTENERS"""

    def test_ipv4(self):
        self.assertEqual(parse_listener("127.0.0.1:8000"), ("127.0.0.1", 8000))

    def test_ipv6(self):
        self.assertEqual(parse_listener("[::1]:8080"), ("::1", 8080))

    def test_invalid(self):
        """Тест адресов без порта"""
        for address in ["localhost", "127.0.0.1:", "host:http", "[::1]"]:
            with self.subTest(address=address):
                with self.assertRaisesRegex(ValueError, r"host:port или \[ipv6\]:port"):
                    parse_listener(address)


class TestSettings(unittest.TestCase):
    """Тесты загрузки настроек"""

    def test_known_timezone(self):
        settings = Settings(DISPLAY_TIMEZONE="Europe/Moscow")
        self.assertEqual(settings.DISPLAY_TIMEZONE, "Europe/Moscow")

    def test_unknown_timezone_fails_at_load(self):
        """Тест: неизвестный пояс - ошибка при загрузке, а не на запросе"""
        for name in ["Mars/Olympus_Mons", "../etc/passwd"]:
            with self.subTest(name=name):
                with self.assertRaises(ValidationError):
                    Settings(DISPLAY_TIMEZONE=name)


class TestCreateApp(unittest.TestCase):
    """Тесты сборки приложения"""

    def test_settings_are_stored(self):
        settings = Settings(PROJECT_NAME="Regtest Explorer")
        app = create_app(settings)

        self.assertIs(app.state.settings, settings)
        self.assertEqual(app.title, "Regtest Explorer")
        self.assertIsNone(app.openapi_url)

    def test_route_names(self):
        """Тест имен маршрутов для редиректов"""
        names = {route.name for route in create_app(Settings()).routes}
        for name in ["block_page", "height_redirect", "tx_page", "search"]:
            self.assertIn(name, names)


if __name__ == "__main__":
    unittest.main()
