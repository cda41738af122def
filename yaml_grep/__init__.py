import logging

###############################################################################
# Exceptions
###############################################################################

class StateViolation(Exception):
    def __init__(self, event, state, filename, line, column):
        super().__init__(
            'Unexpected {} while {} in {} at line {}, column {}'.format(
                event, state, filename, line, column)
        )
        self.event = event
        self.state = state
        self.filename = filename
        self.line = line
        self.column = column

###############################################################################
# Constants
###############################################################################

PATH_SEP = '.'
STDIN_LABEL = 'stdin'

###############################################################################
# States
#
# States describe what the tracker expects the next structural event to be.
###############################################################################

class States:
    AWAITING_MAPPING = 'AWAITING_MAPPING'
    AWAITING_KEY_OR_END = 'AWAITING_KEY_OR_END'
    AWAITING_VALUE = 'AWAITING_VALUE'

###############################################################################
# Events
#
# Events are the notifications that an event source feeds to the tracker. Only
# the first five are modelled; the rest exist so that a source can name what
# it saw when it saw something the tracker doesn't support.
###############################################################################

class Events:
    END_MAPPING = 'END_MAPPING'
    LOCATION = 'LOCATION'
    SCALAR = 'SCALAR'
    START_DOCUMENT = 'START_DOCUMENT'
    START_MAPPING = 'START_MAPPING'

    ALIAS = 'ALIAS'
    END_SEQUENCE = 'END_SEQUENCE'
    START_SEQUENCE = 'START_SEQUENCE'

###############################################################################
# Helpers
###############################################################################

join_path = lambda path: PATH_SEP.join(path)

###############################################################################
# PathTracker
###############################################################################

class PathTracker:
    def __init__(self, on_leaf, filename=STDIN_LABEL, logger=None):
        # on_leaf is called as on_leaf(path, value, line, column) for every
        # completed key / value scalar pair.
        self.on_leaf = on_leaf
        # The filename is only used to label StateViolations.
        self.filename = filename
        self.logger = logger or logging.getLogger(__name__)
        self.reset()

    def reset(self):
        self.state = States.AWAITING_MAPPING
        # Define the stack of keys leading to the current position. A key is
        # pushed when read and popped when its value completes.
        self.path = []
        # Count the open mappings so that the root mapping's close, which has
        # no enclosing key, can be told apart from an unmatched close.
        self.depth = 0
        self.line = 0
        self.column = 0

    def violation(self, event):
        return StateViolation(
            event, self.state, self.filename, self.line, self.column)

    def transition(self, event, state):
        self.logger.debug('%s: %s -> %s path=%s', event, self.state, state,
                          join_path(self.path))
        self.state = state

    def feed(self, event, *args):
        # Dispatch an (event, args) pair as yielded by an event source.
        if event == Events.START_DOCUMENT:
            self.start_document()
        elif event == Events.START_MAPPING:
            self.start_mapping()
        elif event == Events.END_MAPPING:
            self.end_mapping()
        elif event == Events.SCALAR:
            self.scalar(*args)
        elif event == Events.LOCATION:
            self.location(*args)
        else:
            self.unsupported(event)

    def start_document(self):
        self.logger.debug('%s: start of document in %s',
                          Events.START_DOCUMENT, self.filename)
        self.reset()

    def location(self, start_line, start_column, end_line=None,
                 end_column=None):
        # Positions are for display only and never affect the state.
        self.line = start_line
        self.column = start_column

    def start_mapping(self):
        if self.state not in (States.AWAITING_MAPPING, States.AWAITING_VALUE):
            raise self.violation(Events.START_MAPPING)
        # When the mapping is a value, its key stays on the path until the
        # mapping ends.
        self.depth += 1
        self.transition(Events.START_MAPPING, States.AWAITING_KEY_OR_END)

    def end_mapping(self):
        if self.state == States.AWAITING_VALUE:
            # A key with no value; close the key before closing its mapping.
            self.path.pop()
        elif self.state != States.AWAITING_KEY_OR_END or self.depth == 0:
            raise self.violation(Events.END_MAPPING)
        self.depth -= 1
        # Close the key whose value was this mapping. The root mapping has no
        # such key.
        if self.depth > 0:
            self.path.pop()
        self.transition(Events.END_MAPPING, States.AWAITING_KEY_OR_END)

    def scalar(self, value):
        if self.state == States.AWAITING_KEY_OR_END:
            self.path.append(value)
            self.transition(Events.SCALAR, States.AWAITING_VALUE)
        elif self.state == States.AWAITING_VALUE:
            self.on_leaf(list(self.path), value, self.line, self.column)
            self.path.pop()
            self.transition(Events.SCALAR, States.AWAITING_KEY_OR_END)
        else:
            raise self.violation(Events.SCALAR)

    def unsupported(self, event):
        raise self.violation(event)


__all__ = [
    'Events',
    'PathTracker',
    'StateViolation',
    'States',
    'join_path',
]
