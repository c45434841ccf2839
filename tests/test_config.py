from argparse import Namespace

from pytest import raises

from shunt.config import Options


def test_defaults():
    options = Options()
    assert not options.verbose
    assert not options.rpn
    assert options.solve
    assert options.precision is None


def test_toggle():
    options = Options()
    assert options.toggle('rpn') is True
    assert options.rpn
    assert options.toggle('rpn') is False
    assert options.toggle('solve') is False


def test_toggle_unknown():
    with raises(ValueError):
        Options().toggle('precision')


def test_from_args():
    args = Namespace(verbose=True, rpn=False, solve=False, precision=2)
    options = Options.from_args(args)
    assert options.verbose
    assert not options.solve
    assert options.precision == 2
