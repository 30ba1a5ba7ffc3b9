import json
import logging
import os

import click

from config import config
from video_uploader import create_uploader
from video_uploader.exceptions import StoreError
from video_uploader.services import FileSessionStore
from video_uploader.tasks import upload_videos_task
from video_uploader.utils import ClassSchedule, build_upload_request, configure_logging, find_videos, move_to_finished
from video_uploader.utils import passphrase

logger = logging.getLogger(__name__)


def _coordinator(ctx):
    factory = ctx.obj.get('create_uploader', create_uploader)
    try:
        return factory(ctx.obj['config_name'])
    except StoreError as e:
        raise click.ClickException(str(e))


def _schedule(cfg):
    try:
        return ClassSchedule.from_config(cfg)
    except ValueError as e:
        raise click.ClickException(f"invalid class schedule: {e}")


def _report(results):
    for result in results:
        if not result['success']:
            click.echo(f"✗ {result['identifier']}: {result['error']}", err=True)
        elif result['skipped']:
            click.echo(f"- {result['identifier']} already uploaded: {result['resource_uri']}")
        elif result['password'] is None:
            click.echo(f"✓ {result['identifier']}: {result['resource_uri']} "
                       "(resumed, password set when the upload started)")
        else:
            click.echo(f"✓ {result['identifier']}: {result['resource_uri']} (password: {result['password']})")


@click.group()
@click.option('--config', 'config_name', default='default', envvar='UPLOADER_CONFIG',
              type=click.Choice(sorted(config)), help='Configuration to use')
@click.pass_context
def cli(ctx, config_name):
    """Resumable Vimeo video uploader"""
    ctx.ensure_object(dict)
    cfg = config[config_name]
    configure_logging(cfg.LOG_LEVEL)
    ctx.obj['config_name'] = config_name
    ctx.obj['config'] = cfg


@cli.command()
@click.pass_context
def run(ctx):
    """Upload every video in the upload folder"""
    cfg = ctx.obj['config']
    schedule = _schedule(cfg)
    coordinator = _coordinator(ctx)

    try:
        videos = find_videos(cfg.UPLOAD_FOLDER_PATH)
    except OSError as e:
        raise click.ClickException(f"could not read upload folder {cfg.UPLOAD_FOLDER_PATH}: {e}")

    if not videos:
        click.echo(f"No videos found in {cfg.UPLOAD_FOLDER_PATH}")
        return

    upload_requests = []
    failed = []
    for path in videos:
        try:
            upload_requests.append(build_upload_request(
                path,
                cfg,
                passphrase.generate(),
                calculated_name=schedule.video_name(os.path.basename(path)),
            ))
        except OSError as e:
            logger.error("❌ Could not read %s, skipping: %s", path, e)
            failed.append({
                'success': False,
                'identifier': os.path.basename(path),
                'file_path': path,
                'error': str(e),
            })

    def finish(request, result):
        move_to_finished(request.file_path, cfg.FINISHED_FOLDER_PATH)

    results = failed + upload_videos_task(coordinator, upload_requests, on_success=finish)
    _report(results)
    if not all(r['success'] for r in results):
        ctx.exit(1)


@cli.command()
@click.argument('file_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--name', help='Video name shown on Vimeo (defaults to the class schedule name, then the file name)')
@click.option('--description', help='Video description (defaults to the name)')
@click.option('--password', help='Video password (a random passphrase if omitted)')
@click.pass_context
def upload(ctx, file_path, name, description, password):
    """Upload a single video file"""
    cfg = ctx.obj['config']
    if name is None:
        name = _schedule(cfg).video_name(os.path.basename(file_path))
    coordinator = _coordinator(ctx)

    request = build_upload_request(
        file_path,
        cfg,
        password or passphrase.generate(),
        description=description,
        calculated_name=name,
    )
    results = upload_videos_task(coordinator, [request])
    _report(results)
    if not results[0]['success']:
        ctx.exit(1)


@cli.command()
@click.argument('identifier')
@click.pass_context
def status(ctx, identifier):
    """Show the stored upload record for a file name"""
    cfg = ctx.obj['config']
    try:
        record = FileSessionStore.from_folder(cfg.OUTPUT_FOLDER_PATH).get(identifier)
    except StoreError as e:
        raise click.ClickException(str(e))

    if record.is_empty():
        click.echo(f"No upload record for {identifier}")
        ctx.exit(1)
    click.echo(json.dumps(record.to_dict(), indent=2))


if __name__ == '__main__':
    cli()
