import json

import pytest

from src.services.templates.loader import TemplateLoader


@pytest.fixture
def mock_templates_file(tmp_path):
    d = tmp_path / "data"
    d.mkdir()
    p = d / "templates.json"

    data = {
        "templates": [
            {
                "id": "t1",
                "name": "Test 1",
                "html_structure": "<h1>{{text.title}}</h1>",
                "css_structure": "h1{color:{{color.titleColor}}}",
                "customizable_fields": {
                    "text": {"title": "Hi"},
                    "colors": {"titleColor": "#000"},
                },
            },
            {
                "id": "t2",
                "name": "Test 2",
                "customizable_fields": None,
            },
        ],
        "purchases": [
            {"user_id": "u1", "template_id": "t1", "purchased_at": "2024-01-01T00:00:00Z"},
            {"user_id": "u2", "template_id": "t2"},
        ],
    }
    p.write_text(json.dumps(data))
    return p


def test_loader_load(mock_templates_file):
    loader = TemplateLoader(templates_file=mock_templates_file)
    templates = loader.list_templates()
    assert len(templates) == 2
    assert templates[0].name == "Test 1"
    assert templates[1].customizable_fields.text == {}


def test_loader_get(mock_templates_file):
    loader = TemplateLoader(templates_file=mock_templates_file)
    t = loader.get_template("t1")
    assert t is not None
    assert t.customizable_fields.colors == {"titleColor": "#000"}

    assert loader.get_template("nonexistent") is None


def test_loader_purchases(mock_templates_file):
    loader = TemplateLoader(templates_file=mock_templates_file)
    purchases = loader.purchases_for("u1")
    assert [p.template_id for p in purchases] == ["t1"]
    assert purchases[0].purchased_at.year == 2024
    assert loader.purchases_for("u2")[0].purchased_at is not None


def test_loader_missing_file(tmp_path):
    loader = TemplateLoader(templates_file=tmp_path / "nope.json")
    assert loader.list_templates() == []
    assert loader.purchases == []
