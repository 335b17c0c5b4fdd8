import json

from django.core.management.base import BaseCommand, CommandError
from django.core.serializers.json import DjangoJSONEncoder

from pos.services.sale_service import process_sale_transaction


class Command(BaseCommand):
    """Process a sale from the command line and print the result as JSON."""

    help = "Deduct stock for a sale and record it."

    def add_arguments(self, parser):
        parser.add_argument("--file", help="JSON file holding the sale data.")
        parser.add_argument("--menu-item", dest="menu_item", help="Menu item id to sell.")
        parser.add_argument("--quantity", type=float, default=1)
        parser.add_argument("--sale-type", dest="sale_type", default="dine_in")
        parser.add_argument("--staff-email", dest="staff_email", default="")
        parser.add_argument("--staff-name", dest="staff_name", default="")

    def handle(self, *args, **options):
        if options["file"]:
            try:
                with open(options["file"], encoding="utf-8") as fh:
                    sale_data = json.load(fh)
            except (OSError, ValueError) as exc:
                raise CommandError(f"Cannot read sale data: {exc}") from exc
            sale_data = sale_data.get("saleData", sale_data)
        elif options["menu_item"]:
            quantity = options["quantity"]
            sale_data = {
                "items": [
                    {
                        "menu_item_id": options["menu_item"],
                        "quantity": int(quantity) if quantity.is_integer() else quantity,
                    }
                ],
                "sale_type": options["sale_type"],
                "staff_email": options["staff_email"],
                "staff_name": options["staff_name"],
            }
        else:
            raise CommandError("Pass --file or --menu-item.")

        result = process_sale_transaction(sale_data)
        self.stdout.write(json.dumps(result, cls=DjangoJSONEncoder, indent=2))
        if not result["success"]:
            raise CommandError(result.get("error") or result.get("warnings"))
        self.stdout.write(self.style.SUCCESS(f"Recorded sale {result['sale']['sale_number']}."))
