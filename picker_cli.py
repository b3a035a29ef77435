"""Linha de comando do Random Picker (mesma lista usada pelo app Streamlit)."""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Iterable, List

import notices
from clipboard_reader import read_clipboard
from picker_errors import ClipboardUnavailableError, PickerError
from item_manager import ItemCollectionManager
from item_store import Item, ItemStorage, JsonFileBlobStore
from item_table import export_csv
from picker_settings import configure_logging, get_settings
from random_selector import RandomSelector, SleepScheduler


def _print_notice(notice: notices.Notice) -> None:
    stream = sys.stderr if notice.is_error else sys.stdout
    print(f"{notice.title}: {notice.description}", file=stream)


def _print_items(items: List[Item]) -> None:
    if not items:
        print("(nenhum item)")
        return
    width = max(len(it.id) for it in items)
    for it in items:
        print(f"{it.id.rjust(width)}  {it.color}  {it.name}")


def _read_import_text(args: argparse.Namespace) -> str | None:
    if args.text is not None:
        return args.text
    if args.file is not None:
        try:
            return Path(args.file).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            _print_notice(notices.import_file_unreadable(args.file, exc))
            return None
    try:
        return read_clipboard()
    except ClipboardUnavailableError as exc:
        _print_notice(notices.notice_for_error(exc))
        return None


def _cmd_pick(manager: ItemCollectionManager, interval_ms: float) -> int:
    scheduler = SleepScheduler()
    selector = RandomSelector(scheduler, interval_ms=interval_ms)

    def on_frame(pick):
        sys.stdout.write(f"\r🔄 {pick.displayed.name:<20}")
        sys.stdout.flush()

    pick = selector.select(manager.items, on_frame=on_frame)
    try:
        scheduler.run_until_idle()
    finally:
        selector.abandon()
    sys.stdout.write("\r")
    manager.select(pick.result.id)
    print(f"🎉 {pick.result.name}")
    return 0


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="picker_cli", description="Gerencia a lista e sorteia um item.")
    ap.add_argument("--store", type=Path, default=None,
                    help="Arquivo JSON do store (padrão: settings / raw/picker_store.json).")
    sub = ap.add_subparsers(dest="command", required=True)

    p_list = sub.add_parser("list", help="Lista os itens")
    p_list.add_argument("--search", default="", help="Filtra por parte do nome")

    p_add = sub.add_parser("add", help="Adiciona um item")
    p_add.add_argument("name")

    p_edit = sub.add_parser("edit", help="Renomeia um item")
    p_edit.add_argument("id")
    p_edit.add_argument("name")

    p_rm = sub.add_parser("remove", help="Remove um item (id inexistente = nada acontece)")
    p_rm.add_argument("id")

    p_imp = sub.add_parser("import", help="Importação em lote (\\n , ; |)")
    src = p_imp.add_mutually_exclusive_group(required=True)
    src.add_argument("--text")
    src.add_argument("--file")
    src.add_argument("--clipboard", action="store_true")

    p_pick = sub.add_parser("pick", help="Sorteia um item com animação")
    p_pick.add_argument("--interval-ms", type=float, default=None)

    p_exp = sub.add_parser("export", help="Exporta a lista para CSV")
    p_exp.add_argument("--csv", type=Path, required=True)

    return ap.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    settings = get_settings()
    configure_logging(settings["log_level"])

    store_path = args.store or settings["store_path"]
    manager = ItemCollectionManager(ItemStorage(JsonFileBlobStore(store_path)))

    try:
        if args.command == "list":
            _print_items(manager.search(args.search))
        elif args.command == "add":
            _print_notice(notices.item_added(manager.add(args.name)))
        elif args.command == "edit":
            _print_notice(notices.item_updated(manager.edit(args.id, args.name)))
        elif args.command == "remove":
            item = manager.get(args.id)
            manager.remove(args.id)
            if item is not None:
                _print_notice(notices.item_removed(item))
        elif args.command == "import":
            text = _read_import_text(args)
            if text is None:
                return 1
            if not text.strip():
                _print_notice(notices.import_text_required())
                return 1
            result, created = manager.import_text(text)
            problem = notices.notice_for_parse(result)
            if problem is not None:
                _print_notice(problem)
                return 1 if problem.is_error else 0
            _print_items(created)
            _print_notice(notices.import_done(len(created)))
        elif args.command == "pick":
            interval = args.interval_ms if args.interval_ms is not None else settings["frame_interval_ms"]
            return _cmd_pick(manager, interval)
        elif args.command == "export":
            path = export_csv(manager.items, args.csv)
            print(f"Lista exportada para {path}.")
    except PickerError as exc:
        _print_notice(notices.notice_for_error(exc))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
