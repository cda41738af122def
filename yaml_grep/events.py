"""
YAML Event Source
Translates the PyYAML event stream into the (event, args) pairs consumed by
PathTracker.feed().
"""

import yaml

from . import Events

###############################################################################
# Event map
#
# Map PyYAML event classes to tracker events. Classes mapped to None carry no
# structure that the tracker needs and are dropped.
###############################################################################

EVENT_MAP = (
    (yaml.StreamStartEvent, None),
    (yaml.StreamEndEvent, None),
    (yaml.DocumentEndEvent, None),
    (yaml.DocumentStartEvent, Events.START_DOCUMENT),
    (yaml.MappingStartEvent, Events.START_MAPPING),
    (yaml.MappingEndEvent, Events.END_MAPPING),
    (yaml.ScalarEvent, Events.SCALAR),
    (yaml.SequenceStartEvent, Events.START_SEQUENCE),
    (yaml.SequenceEndEvent, Events.END_SEQUENCE),
    (yaml.AliasEvent, Events.ALIAS),
)

###############################################################################
# Helpers
###############################################################################

def translate(yaml_event):
    for cls, event in EVENT_MAP:
        if isinstance(yaml_event, cls):
            return event
    raise NotImplementedError(type(yaml_event).__name__)

def location_args(yaml_event):
    # Return 1-based (start_line, start_column, end_line, end_column) for the
    # event, or None if the parser didn't annotate it.
    start, end = yaml_event.start_mark, yaml_event.end_mark
    if start is None or end is None:
        return None
    return start.line + 1, start.column + 1, end.line + 1, end.column + 1

###############################################################################
# Parsing
###############################################################################

def parse_events(stream):
    """Yield (event, args) tuples for the YAML documents in stream, which may
    be a str, bytes, or a text or binary file object.
    """
    for yaml_event in yaml.parse(stream, Loader=yaml.SafeLoader):
        event = translate(yaml_event)
        if event is None:
            continue
        args = location_args(yaml_event)
        # A document start resets the tracker's position, so follow it with
        # its location rather than precede it.
        if event == Events.START_DOCUMENT:
            yield event, ()
            if args is not None:
                yield Events.LOCATION, args
            continue
        # Precede every other event with its position so that StateViolations
        # and leaves are reported where they occur.
        if args is not None:
            yield Events.LOCATION, args
        if event == Events.SCALAR:
            yield event, (yaml_event.value,)
        else:
            yield event, ()

def search(stream, tracker):
    # Feed every event in stream to tracker.
    for event, args in parse_events(stream):
        tracker.feed(event, *args)
