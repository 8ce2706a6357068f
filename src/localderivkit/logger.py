"""Holds the logger shared by the localderivkit modules.

All modules log through ``localderivkit_logger`` (named ``"localderivkit"``).
The library installs no handlers, so nothing is shown unless the calling
application configures logging. Messages are emitted at two points:

* ``DEBUG``: every factory call that builds an evaluator reports the
  difference kind, the accuracy order, the requested region and the padded
  region the evaluator's cursor is bound to.
* ``INFO``: every :class:`~localderivkit.local_derivative_kit.LocalDerivativeKit`
  sweep reports the evaluator type and the number of positions evaluated.

Evaluation itself does not log.

To see construction details::

    import logging
    logging.getLogger("localderivkit").setLevel(logging.DEBUG)
"""
import logging

logger_name = "localderivkit"
localderivkit_logger = logging.getLogger(logger_name)
