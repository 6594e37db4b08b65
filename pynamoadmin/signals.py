"""
Signals sent by PynamoAdmin, implemented with blinker.

Connect a receiver to observe requests or retries, e.g.::

    from pynamoadmin.signals import retry_scheduled

    @retry_scheduled.connect
    def on_retry(sender, operation_name, attempt, delay_ms):
        ...
"""
from blinker import Namespace

# The namespace for code signals.  If you are not PynamoAdmin code, do
# not put signals in here.  Create your own namespace instead.
_signals = Namespace()

pre_dynamodb_send = _signals.signal('pre_dynamodb_send')
post_dynamodb_send = _signals.signal('post_dynamodb_send')

retry_attempt_failed = _signals.signal('retry_attempt_failed')
retry_scheduled = _signals.signal('retry_scheduled')
