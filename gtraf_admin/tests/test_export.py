import json
from gtraf_admin.services.export import to_csv, to_json


class TestCsvExport:

    def test_empty_list_exports_nothing(self):
        assert to_csv([]) == ""

    def test_header_row_then_one_line_per_record(self):
        rows = [
            {"id": "1", "name": "Awa", "budget": "Moins de 100k€"},
            {"id": "2", "name": "Ibou", "budget": None},
        ]
        assert to_csv(rows) == "id,name,budget\n1,Awa,Moins de 100k€\n2,Ibou,\n"

    def test_values_with_commas_are_quoted(self):
        rows = [{"id": "1", "pickup_location": "Dakar, Plateau", "equipments": ["GPS", "Wi-Fi"]}]
        lines = to_csv(rows).splitlines()
        assert lines[1] == '1,"Dakar, Plateau","GPS, Wi-Fi"'

    def test_columns_cover_every_field_seen(self):
        rows = [{"id": "1"}, {"id": "2", "notes": "urgent"}]
        lines = to_csv(rows).splitlines()
        assert lines == ["id,notes", "1,", "2,urgent"]

    def test_booleans_and_prices_use_display_format(self):
        rows = [{"with_driver": True, "estimated_price": 610.0}]
        assert to_csv(rows).splitlines()[1] == "true,610"


class TestJsonExport:

    def test_json_export_keeps_accents(self):
        data = {"devis": [], "reservations": [{"equipments": ["Siège bébé"]}], "portfolio": []}
        text = to_json(data)
        assert "Siège bébé" in text
        assert json.loads(text) == data
