import unittest
from decimal import Decimal
from types import SimpleNamespace

from storefront import inventory
from storefront.inventory import StockStatus
from storefront.translations import translate


class StockTestCase(unittest.TestCase):
    def test_stock_status_boundaries(self):
        self.assertEqual(inventory.stock_status(0, 10), StockStatus.OUT_OF_STOCK)
        self.assertEqual(inventory.stock_status(1, 10), StockStatus.LOW_STOCK)
        self.assertEqual(inventory.stock_status(8, 10), StockStatus.LOW_STOCK)
        self.assertEqual(inventory.stock_status(10, 10), StockStatus.LOW_STOCK)
        self.assertEqual(inventory.stock_status(11, 10), StockStatus.IN_STOCK)
        self.assertEqual(inventory.stock_status(45, 10), StockStatus.IN_STOCK)

    def test_missing_threshold_uses_default(self):
        self.assertEqual(inventory.stock_status(10, None), StockStatus.LOW_STOCK)
        self.assertEqual(inventory.stock_status(5, 3), StockStatus.IN_STOCK)

    def test_status_labels_translate(self):
        self.assertEqual(translate(StockStatus.LOW_STOCK.label_key), "Low Stock")
        self.assertEqual(translate(StockStatus.OUT_OF_STOCK.label_key, "hi"), "स्टॉक में नहीं")

    def test_stock_percentage_is_capped(self):
        self.assertEqual(inventory.stock_percentage(45), 45.0)
        self.assertEqual(inventory.stock_percentage(250), 100.0)
        self.assertEqual(inventory.stock_percentage(5, max_stock=20), 25.0)


class PricingTestCase(unittest.TestCase):
    def test_discount_percent(self):
        self.assertEqual(inventory.discount_percent(Decimal("24.50"), Decimal("35.00")), 30)
        self.assertEqual(inventory.discount_percent(Decimal("156.00"), Decimal("180.00")), 13)
        self.assertIsNone(inventory.discount_percent(Decimal("10.00"), None))
        self.assertIsNone(inventory.discount_percent(Decimal("10.00"), Decimal("9.00")))

    def test_average_rating(self):
        self.assertEqual(inventory.average_rating([]), Decimal("0.0"))
        self.assertEqual(str(inventory.average_rating([5, 4])), "4.5")
        self.assertEqual(str(inventory.average_rating([5, 4, 4])), "4.3")
        self.assertEqual(str(inventory.average_rating([5, 4, 4, 4])), "4.3")
        self.assertEqual(str(inventory.average_rating([1, 2])), "1.5")

    def test_cart_totals(self):
        items = [
            SimpleNamespace(quantity=2, medicine=SimpleNamespace(price=Decimal("24.50"))),
            SimpleNamespace(quantity=1, medicine=SimpleNamespace(price=Decimal("156.00"))),
        ]
        self.assertEqual(inventory.cart_total(items), Decimal("205.00"))
        self.assertEqual(inventory.cart_count(items), 3)
        self.assertEqual(str(inventory.cart_total([])), "0.00")


class TranslateTestCase(unittest.TestCase):
    def test_fallbacks(self):
        self.assertEqual(translate("cart.title"), "Shopping Cart")
        self.assertEqual(translate("cart.title", "hi"), "शॉपिंग कार्ट")
        self.assertEqual(translate("cart.title", "fr"), "Shopping Cart")
        self.assertEqual(translate("no.such.key", "hi"), "no.such.key")


if __name__ == "__main__":
    unittest.main()
