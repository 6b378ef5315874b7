# manage.py
import json
import os

import click

from backend import create_app
from backend.models import DailyState

app = create_app()


def _manager():
    return app.extensions["daily_state"]


# ---------------------------
# DOCUMENTO DAILY
# ---------------------------

@app.cli.command("init-store")
@click.option("--force", is_flag=True, help="Sovrascrive anche un documento già esistente")
def init_store(force):
    """Scrive il documento daily con i valori di default."""
    mgr = _manager()
    with app.app_context():
        current = mgr.store.load()
        if not force and current != DailyState():
            click.secho("Documento già presente (usa --force per sovrascrivere).", fg="yellow")
            return
        mgr.store.save(DailyState())
        click.secho("✅ Documento daily inizializzato.", fg="green")


@app.cli.command("show-daily")
def show_daily():
    """Stampa il documento daily (con scadenza override applicata)."""
    with app.app_context():
        state = _manager().read()
        click.echo(json.dumps(state.to_dict(), ensure_ascii=False, indent=2))


@app.cli.command("reset-daily")
@click.option("--notice/--no-notice", default=True, help="Resetta l'avviso")
@click.option("--override/--no-override", default=True, help="Resetta l'override orari")
def reset_daily(notice, override):
    """Riporta avviso e/o override orari ai default."""
    mgr = _manager()
    with app.app_context():
        done = mgr.reset(mgr.secret, notice=notice, override=override)
    click.secho(f"🗑️  Reset: {', '.join(done) or '-'}", fg="yellow")


@app.cli.command("generate-plan")
@click.option("--seed", type=int, default=None, help="Seed per una generazione riproducibile")
def generate_plan(seed):
    """Genera un piano settimanale casuale dalla lista piatti."""
    mgr = _manager()
    if seed is not None:
        mgr.rng.seed(seed)
    with app.app_context():
        plan = mgr.generate_plan(mgr.secret)
    for day, entry in plan.days.items():
        click.echo(f"- {day}: {entry['dish1']} / {entry['dish2']}")


if __name__ == "__main__":
    # Avvio rapido: python manage.py
    # Nota: per i comandi CLI usa "flask <cmd>" con FLASK_APP=manage.py
    app.run(host="127.0.0.1", port=int(os.environ.get("PORT", 3001)), debug=True)
