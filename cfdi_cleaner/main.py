import logging
import sys

import click

from cfdi_cleaner.cleaners.cfdi_cleaner import CfdiCleaner
from cfdi_cleaner.exceptions import CfdiCleanerError


def read_content(path: str) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


def build_cleaner(input_path: str) -> CfdiCleaner:
    try:
        return CfdiCleaner(read_content(input_path))
    except CfdiCleanerError as e:
        click.secho(f"\nError al cargar el CFDI: {e}", fg='red', err=True)
        sys.exit(1)


@click.group()
@click.option('--verbose', is_flag=True, default=False, help='Muestra el detalle de cada paso de limpieza.')
def cli(verbose):
    """Herramienta para limpiar CFDI de Addendas, nodos y namespaces ajenos al SAT."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )


@cli.command()
@click.option('--input', 'input_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Ruta al CFDI de entrada.')
@click.option('--output', 'output_path', type=click.Path(dir_okay=False), default=None, help='Ruta para guardar el CFDI limpio. Si se omite se escribe en la salida estándar.')
def clean(input_path, output_path):
    """Limpia un CFDI y guarda el resultado."""
    cleaner = build_cleaner(input_path)
    try:
        cleaner.clean()
    except CfdiCleanerError as e:
        click.secho(f"\nError durante la limpieza: {e}", fg='red', err=True)
        sys.exit(1)

    xml = cleaner.retrieve_xml()
    if output_path is None:
        click.echo(xml, nl=False)
        return

    with open(output_path, 'wb') as f:
        f.write(xml.encode('utf-8'))
    click.secho(f"CFDI limpio guardado en: {output_path}", fg='green', err=True)


@cli.command()
@click.option('--input', 'input_path', required=True, type=click.Path(exists=True, dir_okay=False), help='Ruta al CFDI que se desea revisar.')
def check(input_path):
    """Revisa si un CFDI requiere limpieza, sin modificar el archivo."""
    cleaner = build_cleaner(input_path)
    try:
        summary = cleaner.clean()
    except CfdiCleanerError as e:
        click.secho(f"\nError durante la revisión: {e}", fg='red', err=True)
        sys.exit(1)

    click.echo(f"Versión de CFDI: {cleaner.version}")
    for step, count in summary.items():
        click.echo(f"  - {step}: {count}")

    if any(summary.values()):
        click.secho("El CFDI requiere limpieza.", fg='yellow')
        sys.exit(1)
    click.secho("El CFDI ya está limpio.", fg='green')


if __name__ == '__main__':
    cli()
