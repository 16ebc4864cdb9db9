from testtools import ExpectedException

from jenkins_markup import errors
from tests import base


class SectionEmitter(object):

    def add_markup(self, exc, *args):
        raise exc(*args)


def build_job(exc, *args):
    data = {'name': 'nightly'}  # noqa

    raise exc(*args)


class TestInvalidAttributeError(base.BaseTestCase):

    def test_no_valid_values(self):
        # When given no valid values, InvalidAttributeError simply displays a
        # message indicating the invalid value, the emitter and the
        # attribute name.
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            "fnord", "SectionEmitter", "fubar")
        with ExpectedException(errors.InvalidAttributeError, message):
            SectionEmitter().add_markup(errors.InvalidAttributeError,
                                        "fubar", "fnord")

    def test_with_valid_values(self):
        # When given valid values, InvalidAttributeError additionally lists
        # them.
        valid_values = ['herp', 'derp']
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            "fnord", "job.nightly", "fubar")
        message += "\nValid values include: {0}".format(
            ', '.join("'{0}'".format(value) for value in valid_values))

        with ExpectedException(errors.InvalidAttributeError, message):
            build_job(errors.InvalidAttributeError, "fubar", "fnord",
                      valid_values)

    def test_unresolved_module(self):
        with ExpectedException(errors.InvalidAttributeError,
                               "'fnord' is an invalid value for attribute "
                               "<unresolved>.fubar"):
            raise errors.InvalidAttributeError("fubar", "fnord")


class TestMissingAttributeError(base.BaseTestCase):

    def test_with_single_missing_attribute(self):
        # When passed a single missing attribute, display a message indicating
        #  * the missing attribute
        #  * which emitter or job is missing it.
        missing_attribute = 'herp'
        message = "Missing {0} from an instance of '{1}'".format(
            missing_attribute, 'SectionEmitter')

        with ExpectedException(errors.MissingAttributeError, message):
            SectionEmitter().add_markup(errors.MissingAttributeError,
                                        missing_attribute)

        with ExpectedException(errors.MissingAttributeError,
                               message.replace('SectionEmitter',
                                               'job.nightly')):
            build_job(errors.MissingAttributeError, missing_attribute)

    def test_with_multiple_missing_attributes(self):
        missing_attribute = ['herp', 'derp']
        message = "One of {0} must be present in '{1}'".format(
            ', '.join("'{0}'".format(value) for value in missing_attribute),
            'SectionEmitter')

        with ExpectedException(errors.MissingAttributeError, message):
            SectionEmitter().add_markup(errors.MissingAttributeError,
                                        missing_attribute)

    def test_explicit_module_name(self):
        with ExpectedException(errors.MissingAttributeError,
                               "Missing name from an instance of 'job'"):
            build_job(errors.MissingAttributeError, 'name', 'job')


class TestAttributeConflictError(base.BaseTestCase):

    def test_conflict(self):
        message = ("Attribute 'private-repository' can not be used together "
                   "with 'private-repository-per-executor' in job.nightly")
        with ExpectedException(errors.AttributeConflictError, message):
            build_job(errors.AttributeConflictError, 'private-repository',
                      ['private-repository-per-executor'])


class TestJobTypeError(base.BaseTestCase):

    def test_message(self):
        error = errors.JobTypeError('maven', 'maven', 'freestyle')
        self.assertEqual("Section 'maven' is only valid for maven jobs, "
                         "not freestyle", str(error))
        self.assertIsInstance(error, errors.JenkinsMarkupException)
