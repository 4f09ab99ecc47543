"""Tests for CLI commands."""

from datetime import datetime, timedelta

import pytest

from showroom.cli.main import cli


@pytest.fixture
def invoke(cli_runner, data_dir):
    """Run a CLI command against the temporary data directory."""

    def run(*args, input=None):
        return cli_runner.invoke(cli, ["--data-dir", str(data_dir), *args], input=input)

    return run


@pytest.fixture
def corolla(invoke):
    result = invoke("add", "Toyota", "Corolla", "--price", "20000", "--quantity", "5")
    assert result.exit_code == 0
    return result


def test_help_does_not_touch_data(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "Showroom" in result.output


def test_add_model(corolla, data_dir):
    assert "Added Toyota Corolla" in corolla.output
    assert "Rs 20,000.00" in corolla.output
    assert (data_dir / "inventory.csv").read_text() == "Toyota,Corolla,20000,5,\n"


def test_add_with_local_image(invoke, sample_image, data_dir):
    result = invoke(
        "add", "Honda", "Civic", "--price", "Rs 24,500", "--quantity", "2", "--image", str(sample_image)
    )

    assert result.exit_code == 0
    assert "images/Honda_Civic.jpg" in result.output
    assert (data_dir / "images" / "Honda_Civic.jpg").exists()


def test_add_with_unreadable_image_warns(invoke, data_dir):
    result = invoke(
        "add", "Honda", "Civic", "--price", "24500", "--quantity", "2", "--image", str(data_dir / "nope.png")
    )

    assert result.exit_code == 0
    assert "Model added without image" in result.output


def test_add_duplicate(corolla, invoke):
    result = invoke("add", "toyota", "COROLLA", "--price", "1", "--quantity", "1")

    assert result.exit_code == 1
    assert "already exists" in result.output
    assert "showroom update" in result.output


@pytest.mark.parametrize(
    "price, quantity",
    [("0", "1"), ("-100", "1"), ("cheap", "1"), ("100", "-1"), ("100", "2.5")],
)
def test_add_invalid_values(invoke, price, quantity):
    result = invoke("add", "Toyota", "Corolla", "--price", price, "--quantity", quantity)

    assert result.exit_code == 1
    assert "Error:" in result.output


def test_update_model(corolla, invoke):
    result = invoke("update", "toyota", "corolla", "--model", "Corolla Cross", "--quantity", "7")

    assert result.exit_code == 0
    assert "Updated Toyota Corolla Cross" in result.output
    assert "Quantity: 7" in result.output


def test_update_requires_a_change(corolla, invoke):
    result = invoke("update", "Toyota", "Corolla")

    assert result.exit_code == 1
    assert "Nothing to update" in result.output


def test_update_missing_model(invoke):
    result = invoke("update", "Toyota", "Supra", "--price", "50000")

    assert result.exit_code == 1
    assert "not found" in result.output


def test_remove_model_confirmed(corolla, invoke):
    result = invoke("remove", "Toyota", "Corolla", input="y\n")

    assert result.exit_code == 0
    assert "Removed Toyota Corolla" in result.output
    assert "No models in the catalog" in invoke("list").output


def test_remove_model_cancelled(corolla, invoke):
    result = invoke("remove", "Toyota", "Corolla", input="n\n")

    assert result.exit_code == 0
    assert "Removal cancelled" in result.output
    assert invoke("show", "Toyota", "Corolla").exit_code == 0


def test_remove_missing_model(invoke):
    result = invoke("remove", "Toyota", "Supra", "--yes")

    assert result.exit_code == 1
    assert "Model 'Toyota Supra' not found" in result.output


def test_show_missing_model(invoke):
    result = invoke("show", "Toyota", "Supra")

    assert result.exit_code == 1
    assert "Model 'Toyota Supra' not found" in result.output


def test_sell_until_out_of_stock(invoke):
    invoke("add", "BMW", "X5", "--price", "65000", "--quantity", "1")

    first = invoke("sell", "bmw", "x5")
    second = invoke("sell", "BMW", "X5")

    assert first.exit_code == 0
    assert "Sold BMW X5 for Rs 65,000.00" in first.output
    assert "Remaining stock: 0" in first.output
    assert second.exit_code == 1
    assert "out of stock" in second.output


def test_brands_and_list(corolla, invoke):
    invoke("add", "Honda", "Civic", "--price", "24000", "--quantity", "3")

    assert invoke("brands").output.splitlines() == ["Honda", "Toyota"]
    listing = invoke("list", "--brand", "honda").output
    assert "Civic" in listing
    assert "Corolla" not in listing


def test_search(corolla, invoke):
    invoke("add", "Honda", "Civic", "--price", "24000", "--quantity", "0")

    result = invoke("search", "--min-price", "20000", "--max-price", "24000", "--in-stock")

    assert result.exit_code == 0
    assert "Corolla" in result.output
    assert "Civic" not in result.output
    assert "1 model found" in result.output


def test_search_no_match(corolla, invoke):
    result = invoke("search", "lamborghini")

    assert "No models match the search" in result.output


def test_sales_and_report(corolla, invoke):
    invoke("sell", "Toyota", "Corolla")
    invoke("sell", "Toyota", "Corolla")

    sales = invoke("sales")
    assert sales.exit_code == 0
    assert "Total transactions recorded: 2" in sales.output
    assert datetime.now().strftime("%d-%m-%Y") in sales.output

    report = invoke("report")
    assert "Rs 60,000.00" in report.output
    assert "Rs 40,000.00" in report.output
    assert "2 Units" in report.output
    assert "Toyota Corolla (2 units)" in report.output


def test_report_without_sales(invoke):
    assert "N/A (No sales yet)" in invoke("report").output


def test_sales_date_filters(corolla, invoke, data_dir):
    (data_dir / "sales_log.csv").write_text("2020-05-01 10:00:00,Toyota,Corolla,20000\n")

    assert "No sales found" in invoke("sales", "--this-month").output
    assert "01-05-2020 10:00" in invoke("sales", "--start-date", "2020-05-01", "--end-date", "2020-05-01").output

    result = invoke("sales", "--this-month", "--last-month")
    assert result.exit_code == 1
    assert "Only one period option" in result.output

    tomorrow = (datetime.now() + timedelta(days=1)).strftime("%Y-%m-%d")
    result = invoke("sales", "--start-date", tomorrow, "--end-date", "2020-01-01")
    assert result.exit_code == 1
    assert "must not be after" in result.output


def test_malformed_catalog_line_logged(invoke, data_dir):
    (data_dir / "inventory.csv").write_text("Toyota,Corolla,20000,5,\nbroken\n")

    result = invoke("list")

    assert result.exit_code == 0
    assert "Corolla" in result.output
    assert "catalog_line_skipped" in result.output
