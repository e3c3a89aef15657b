import importlib

import matplotlib.pyplot as plt
from openpyxl import Workbook

import xlsxboost


def test_public_api():
    for name in (
        "initialize",
        "initialize_matplotlib",
        "open_file",
        "add_header",
        "add_plot",
    ):
        assert callable(getattr(xlsxboost, name))
    assert xlsxboost.__version__


def test_subpackages_importable():
    for module in ("xlsxboost.config", "xlsxboost.excel", "xlsxboost.utils"):
        assert importlib.import_module(module)


def test_header_and_plot_workflow(tmp_path, monkeypatch):
    monkeypatch.setenv("MPLBACKEND", "Agg")
    xlsxboost.initialize()

    wb = Workbook()
    sheet = wb.create_sheet("example")
    xlsxboost.add_header(wb, sheet, value="Report", level=1, color="black")
    xlsxboost.add_header(wb, sheet, value="Details", level=2, color="blue")
    assert xlsxboost.add_plot(wb, sheet, lambda: plt.plot([1, 3, 2]), width=300, height=200)

    assert sheet["B1"].value == "Report"
    assert sheet["B2"].value == "Details"
    assert sheet._images[0].anchor == "B3"

    path = tmp_path / "example.xlsx"
    wb.save(path)
    assert path.stat().st_size > 0
