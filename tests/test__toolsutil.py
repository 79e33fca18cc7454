import logging

from id3edit._tools._util import SignalHandler, print_error, setup_logging

from tests import TestCase, capture_output


class TSignalHandler(TestCase):

    def test_handler_raises(self):
        handler = SignalHandler()
        self.assertRaises(SystemExit, handler._handler, 2, None)

    def test_block_postpones(self):
        handler = SignalHandler()
        done = []

        def run():
            with handler.block():
                handler._handler(2, None)
                done.append(True)

        self.assertRaises(SystemExit, run)
        self.assertEqual(done, [True])

    def test_block_quiet(self):
        handler = SignalHandler()
        with handler.block():
            pass
        self.assertFalse(handler._nosig)

    def test_block_error(self):
        handler = SignalHandler()

        def run():
            with handler.block():
                raise ValueError

        self.assertRaises(ValueError, run)
        self.assertFalse(handler._nosig)


class Tprint_error(TestCase):

    def test_main(self):
        with capture_output() as (out, err):
            print_error("broken")
        self.assertEqual(out.getvalue(), "")
        self.assertEqual(err.getvalue(), "Error: broken\n")


class Tsetup_logging(TestCase):

    def tearDown(self):
        logging.getLogger().setLevel(logging.WARNING)

    def test_levels(self):
        setup_logging(True)
        self.assertEqual(logging.getLogger().level, logging.DEBUG)
        setup_logging(False)
        self.assertEqual(logging.getLogger().level, logging.WARNING)
