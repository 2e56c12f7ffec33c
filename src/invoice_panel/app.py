import logging

from invoice_panel.core.services.catalog import load_service_catalog, seed_services
from invoice_panel.core.services.company import load_company
from invoice_panel.core.services.settings import load_settings, records_path
from invoice_panel.core.services.store import JsonRecordStore
from invoice_panel.ui.controllers.invoice_controller import InvoiceController
from invoice_panel.ui.layouts.main_window import MainWindow
from invoice_panel.ui.notifications import MessageboxNotifier


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    settings = load_settings()
    store = JsonRecordStore(records_path(settings))
    seed_services(store, load_service_catalog())
    controller = InvoiceController(store, MessageboxNotifier(), settings, load_company())
    app = MainWindow(controller)
    app.mainloop()


if __name__ == "__main__":
    main()
