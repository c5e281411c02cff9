"""
Demo generator: builds a small ledger and writes the report and one order form.

    python -m order_ledger [output_dir]
"""

import os
import sys
from datetime import date, timedelta

from .config import STORAGE_FILE
from .layout import DocumentLayoutEngine
from .ledger import Ledger
from .models import OrderFormData, OrderStatus
from .persistence import JsonFileGateway
from .query import QueryView
from .surface import ReportLabSurface

SAMPLE_ORDERS = [
    ("Fita jacquard 25mm com logótipo tecido a duas cores", "1200 m", "Têxteis Norte", "Jacquard", "Ana Costa", False),
    ("Cordão redondo 4mm em algodão reciclado, acabamento encerado", "800 m", "EcoPack", "Cordão", "", True),
    ("Tingimento de lote de fita de cetim, cor Pantone 7621 C. Amostra aprovada "
     "pelo cliente deve acompanhar a ordem até à expedição.", "3 rolos", "Atelier Lisboa", "Tinturaria", "Rui Matos", False),
    ("Calandragem de fita elástica", "500 m", "Sportline", "Calandra", "", False),
]


def main(output_dir="."):
    os.makedirs(output_dir, exist_ok=True)
    ledger = Ledger(JsonFileGateway(os.path.join(output_dir, STORAGE_FILE)))
    ledger.load()

    if not len(ledger):
        print("Creating sample orders...")
        start = date.today() - timedelta(days=len(SAMPLE_ORDERS))
        for i, (item, qty, client, section, agent, eco) in enumerate(SAMPLE_ORDERS):
            ledger.add(OrderFormData(
                description=item, quantity=qty, client_name=client, section=section,
                commercial_agent=agent, is_eco_flagged=eco, created_date=start + timedelta(days=i),
            ))
        ledger.set_status(ledger.records[-1].id, OrderStatus.COMPLETED)

    view = QueryView().compute(ledger)
    engine = DocumentLayoutEngine()
    surface = ReportLabSurface(output_dir)

    print("Generating ledger report...")
    report_path = engine.layout_ledger(view).render(surface)
    print(f"Saved to: {report_path}")

    print("Generating order form...")
    form_path = engine.layout_record(view[0]).render(surface)
    print(f"Saved to: {form_path}")

    print(f"\nDocuments generated successfully! Total orders: {len(ledger)}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
