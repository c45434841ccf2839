class Options:
    '''
    Mode flags for a calculator session.

    Passed explicitly to the converter, machine and session; the CLI holds
    the one instance it toggles.

    :param verbose: Trace tokens and execution, show stack traces on errors.
    :param rpn: Show the postfix form of each expression.
    :param solve: Evaluate expressions; if off, only convert them.
    :param precision: Round results to this many decimal places on output.
    '''

    FLAGS = 'verbose', 'rpn', 'solve'

    def __init__(self, verbose=False, rpn=False, solve=True, precision=None):
        self.verbose = verbose
        self.rpn = rpn
        self.solve = solve
        self.precision = precision

    @classmethod
    def from_args(cls, args):
        '''
        Build options from parsed command line arguments.
        '''
        return cls(verbose=args.verbose,
                   rpn=args.rpn,
                   solve=args.solve,
                   precision=args.precision)

    def toggle(self, flag):
        '''
        Flip boolean flag, returning its new value.
        '''
        if flag not in type(self).FLAGS:
            raise ValueError('No such flag {!r}'.format(flag))
        value = not getattr(self, flag)
        setattr(self, flag, value)
        return value

    def __repr__(self):
        return '{}(verbose={!r}, rpn={!r}, solve={!r}, precision={!r})'.format(
            type(self).__name__,
            self.verbose,
            self.rpn,
            self.solve,
            self.precision)
