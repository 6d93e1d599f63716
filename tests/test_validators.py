"""
Тесты проверки сегментов пути
"""

import unittest

from app.services.errors import (
    InvalidHashError,
    InvalidHeightError,
    InvalidInputError,
    InvalidTxIdError,
    UnknownSearchTermError,
)
from app.services.validators import (
    classify_search,
    parse_int,
    validate_hash,
    validate_height,
)

VALID_HASH = "000000000019d6689c085ae165831e934ff763ae46a2a6c172b3f1b60a8ce26f"


class TestValidateHash(unittest.TestCase):
    """Тесты проверки хеша"""

    def test_valid_hash(self):
        """Тест корректного хеша"""
        self.assertEqual(validate_hash(VALID_HASH), VALID_HASH)

    def test_leading_separator_is_stripped(self):
        """Тест удаления ведущего разделителя"""
        self.assertEqual(validate_hash("/" + VALID_HASH), VALID_HASH)

    def test_uppercase_is_normalized(self):
        """Тест приведения к нижнему регистру"""
        self.assertEqual(validate_hash(VALID_HASH.upper()), VALID_HASH)

    def test_wrong_length_rejected(self):
        """Тест хешей неправильной длины"""
        for value in ["", "/", "abc", VALID_HASH[:63], VALID_HASH + "0", "/" * 65]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidHashError):
                    validate_hash(value)

    def test_non_hex_rejected(self):
        """Тест хешей с не-hex символами"""
        for bad in ["g", "z", " ", "-", "/", "é"]:
            value = VALID_HASH[:-1] + bad
            with self.subTest(value=value):
                with self.assertRaises(InvalidHashError):
                    validate_hash(value)

    def test_txid_error_type(self):
        """Тест отдельного типа ошибки для txid"""
        with self.assertRaises(InvalidTxIdError) as ctx:
            validate_hash("nope", InvalidTxIdError)
        self.assertEqual(ctx.exception.message, "Invalid transaction id")
        self.assertEqual(ctx.exception.status_code, 400)

    def test_error_message(self):
        """Тест сообщения для пользователя"""
        with self.assertRaises(InvalidHashError) as ctx:
            validate_hash("abc")
        self.assertEqual(ctx.exception.message, "Invalid block hash")
        self.assertIsInstance(ctx.exception, InvalidInputError)


class TestValidateHeight(unittest.TestCase):
    """Тесты проверки высоты"""

    def test_decimal(self):
        """Тест десятичной высоты"""
        self.assertEqual(validate_height("100"), 100)
        self.assertEqual(validate_height("/0"), 0)

    def test_prefixed_bases(self):
        """Тест высоты с префиксом системы счисления"""
        self.assertEqual(validate_height("0x10"), 16)
        self.assertEqual(validate_height("0o10"), 8)
        self.assertEqual(validate_height("0b10"), 2)

    def test_leading_zeros_decimal(self):
        """Тест десятичной высоты с ведущими нулями"""
        self.assertEqual(validate_height("007"), 7)

    def test_non_integer_rejected(self):
        """Тест нечисловых значений"""
        values = [
            "",
            "/",
            "abc",
            "1.5",
            "1e3",
            "0xzz",
            "12abc",
            VALID_HASH,
            "1_000",
            "0x1_f",
            " 12",
            "12 ",
            "12\n",
            "\u0661\u0662",
            "0x",
            "+",
        ]
        for value in values:
            with self.subTest(value=value):
                with self.assertRaises(InvalidHeightError):
                    validate_height(value)

    def test_explicit_sign(self):
        """Тест явного знака плюс"""
        self.assertEqual(validate_height("+7"), 7)
        self.assertEqual(validate_height("+0x10"), 16)

    def test_negative_rejected(self):
        """Тест отрицательной высоты"""
        with self.assertRaises(InvalidHeightError):
            validate_height("-1")

    def test_parse_int_is_deterministic(self):
        """Тест повторяемости разбора"""
        self.assertEqual(parse_int("42"), parse_int("42"))


class TestClassifySearch(unittest.TestCase):
    """Тесты классификации поискового запроса"""

    def test_hash(self):
        """Тест запроса в форме хеша"""
        self.assertEqual(classify_search(VALID_HASH), ("block", VALID_HASH))

    def test_all_digit_hash_is_hash(self):
        """Тест: 64 цифры считаются хешем, а не высотой"""
        term = "1" * 64
        self.assertEqual(classify_search(term), ("block", term))

    def test_height(self):
        """Тест запроса в форме высоты"""
        self.assertEqual(classify_search("170"), ("height", "170"))
        self.assertEqual(classify_search("0x1f"), ("height", "0x1f"))

    def test_unknown(self):
        """Тест нераспознанного запроса"""
        for term in ["", "hello", VALID_HASH[:40], "1Addr", "1_0", " 5", "\u0665"]:
            with self.subTest(term=term):
                with self.assertRaises(UnknownSearchTermError) as ctx:
                    classify_search(term)
                self.assertEqual(ctx.exception.message, f"Unknown search value: {term}")


if __name__ == "__main__":
    unittest.main()
