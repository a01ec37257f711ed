from propshrink import (
    RegexError, TestRunner, Volume, bytes_regex, config_from_environ,
    string_regex,
)
import click


@click.command(
    help="""
propshrink generates values matching a regular expression, the same way a
property based test built on it would.

Usage is 'propshrink PATTERN'. Each generated value is printed on its own
line (as a Python literal). With --simplify, the chain of successively
simpler values each one shrinks through is printed beneath it.

Budgets can be tuned with PROPSHRINK_* environment variables, e.g.
PROPSHRINK_MAX_LOCAL_REJECTS.
""".strip()
)
@click.option('--count', '-n', default=10, type=click.IntRange(min=0), help=(
    'Number of values to generate'
))
@click.option('--seed', default=None, type=int, help=(
    'Seed for the random number generator, for reproducible output'
))
@click.option('--bytes', 'as_bytes', default=False, is_flag=True, help=(
    'Treat the pattern as a bytes pattern and generate byte strings'
))
@click.option('--simplify', default=False, is_flag=True, help=(
    'Print the simplification path of every generated value'
))
@click.option('--debug', default=False, is_flag=True, help=(
    'Emit debug output from the runner'
))
@click.option('--quiet', default=False, is_flag=True, help=(
    'Emit nothing but the generated values'
))
@click.argument('pattern')
def main(pattern, count, seed, as_bytes, simplify, debug, quiet):
    if debug and quiet:
        raise click.UsageError('Cannot have both debug output and be quiet')

    if debug:
        volume = Volume.debug
    elif quiet:
        volume = Volume.quiet
    else:
        volume = Volume.normal

    try:
        config = config_from_environ()
    except ValueError as e:
        raise click.UsageError(str(e))

    try:
        if as_bytes:
            strategy = bytes_regex(pattern)
        else:
            strategy = string_regex(pattern)
    except RegexError as e:
        raise click.BadParameter(str(e), param_hint='PATTERN')

    runner = TestRunner(config, seed=seed, volume=volume, printer=click.echo)
    runner.output('Seed: %r' % (runner.seed,))
    runner.debug('Strategy: %r' % (strategy,))

    for _ in range(count):
        value = strategy.new_value(runner)
        click.echo(repr(value.current()))
        if simplify:
            while value.simplify():
                click.echo('  -> %r' % (value.current(),))


if __name__ == '__main__':
    main()
