"""
Affiche un thème natal védique (ou le contexte du jour) dans le terminal.

Exemples:
    python -m scripts.print_chart 1990-01-15 06:30 23.1765 75.7885
    python -m scripts.print_chart 1990-01-15 06:30 23.1765 75.7885 --json
    python -m scripts.print_chart --today 2024-03-21
"""

from __future__ import annotations

import argparse
import json

from cosmic.core.logging import setup_logging
from cosmic.domain.formatting import format_daily_context, natal_chart_for_prompt
from cosmic.domain.zodiac import format_dms
from cosmic.infra.astro.internal_astro import compute_natal_chart, compute_vedic_daily_context


def _print_chart(chart) -> None:
    asc = chart.ascendant
    print(f"JD {chart.julian_day:.6f}  ayanamsa {format_dms(chart.ayanamsa)}  ({chart.precision})")
    print(
        f"Lagna   {asc.rashi:<12} {format_dms(asc.degree_in_rashi):>12}"
        f"  {asc.nakshatra} {asc.nakshatra_pada}"
    )
    for body, pos in chart.planets.items():
        flag = " R" if pos.is_retrograde else ""
        print(
            f"{body.value:<7} {pos.rashi:<12} {format_dms(pos.degree_in_rashi):>12}"
            f"  {pos.nakshatra} {pos.nakshatra_pada}  H{pos.house}{flag}"
        )
    print(f"Tithi   {chart.tithi.paksha} {chart.tithi.name}  Yoga {chart.yoga.name}")
    print(f"Phase   {chart.lunar_phase.phase} ({chart.lunar_phase.illumination:.0%})")
    if chart.doshas is not None:
        d = chart.doshas
        print(f"Doshas  vata {d.vata}%  pitta {d.pitta}%  kapha {d.kapha}%")


def main(argv: list[str] | None = None) -> None:
    """
    Point d'entrée principal.

    Calcule le thème pour les arguments donnés et l'affiche en texte ou en JSON.
    """
    parser = argparse.ArgumentParser(description="Print a Vedic natal chart")
    parser.add_argument("date", nargs="?", help="Birth date YYYY-MM-DD")
    parser.add_argument("time", nargs="?", default="12:00", help="Birth time HH:MM[:SS]")
    parser.add_argument("lat", nargs="?", type=float, default=0.0)
    parser.add_argument("lon", nargs="?", type=float, default=0.0)
    parser.add_argument("--precision", choices=("fast", "standard"), default="standard")
    parser.add_argument("--today", metavar="DATE", help="Print the daily context for DATE")
    parser.add_argument("--json", action="store_true", help="Emit JSON instead of text")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    if args.today:
        ctx = compute_vedic_daily_context(args.today, precision=args.precision)
        payload = format_daily_context(ctx)
        if args.json:
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        else:
            for key, value in payload.items():
                print(f"{key:<10} {value}")
        return

    if not args.date:
        parser.error("date is required unless --today is given")
    chart = compute_natal_chart(args.date, args.time, args.lat, args.lon, precision=args.precision)
    if args.json:
        print(json.dumps(natal_chart_for_prompt(chart), ensure_ascii=False, indent=2))
    else:
        _print_chart(chart)


if __name__ == "__main__":  # pragma: no cover - script entry
    main()
