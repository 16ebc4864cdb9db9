"""Exception classes for jenkins_markup errors"""

import inspect


def is_sequence(arg):
    return (not hasattr(arg, "strip") and
            (hasattr(arg, "__getitem__") or
             hasattr(arg, "__iter__")))


class JenkinsMarkupException(Exception):
    pass


class ModuleError(JenkinsMarkupException):

    def get_module_name(self):
        frame = inspect.currentframe()
        co_name = frame.f_code.co_name
        module_name = '<unresolved>'
        while frame and co_name != 'markup':
            # markup generated by a sub-emitter
            if co_name == 'add_markup' and 'self' in frame.f_locals:
                module_name = type(frame.f_locals['self']).__name__
                break
            # job definitions being turned into models
            if co_name == 'build_job':
                data = frame.f_locals['data']
                module_name = "job.%s" % data.get('name', '<unnamed>')
                break
            frame = frame.f_back
            if frame is None:
                break
            co_name = frame.f_code.co_name

        return module_name


class InvalidAttributeError(ModuleError):

    def __init__(self, attribute_name, value, valid_values=None):
        message = "'{0}' is an invalid value for attribute {1}.{2}".format(
            value, self.get_module_name(), attribute_name)

        if is_sequence(valid_values):
            message += "\nValid values include: {0}".format(
                ', '.join("'{0}'".format(value)
                          for value in valid_values))

        super(InvalidAttributeError, self).__init__(message)


class MissingAttributeError(ModuleError):

    def __init__(self, missing_attribute, module_name=None):
        module = module_name or self.get_module_name()
        if is_sequence(missing_attribute):
            message = "One of {0} must be present in '{1}'".format(
                ', '.join("'{0}'".format(value)
                          for value in missing_attribute), module)
        else:
            message = "Missing {0} from an instance of '{1}'".format(
                missing_attribute, module)

        super(MissingAttributeError, self).__init__(message)


class AttributeConflictError(ModuleError):

    def __init__(
        self, attribute_name, attributes_in_conflict, module_name=None
    ):
        module = module_name or self.get_module_name()
        message = (
            "Attribute '{0}' can not be used together with {1} in {2}".format(
                attribute_name,
                ', '.join(
                    "'{0}'".format(value) for value in attributes_in_conflict
                ), module
            )
        )

        super(AttributeConflictError, self).__init__(message)


class MarkupPreconditionError(JenkinsMarkupException):
    """A required generation argument is missing or empty."""


class JobTypeError(JenkinsMarkupException):
    """A section reserved for one job type was requested for another."""

    def __init__(self, section, expected, actual):
        message = "Section '{0}' is only valid for {1} jobs, not {2}".format(
            section, expected, actual)
        super(JobTypeError, self).__init__(message)


class MarkupError(JenkinsMarkupException):
    pass


class YAMLFormatError(JenkinsMarkupException):
    pass


class MarkupConfigException(JenkinsMarkupException):
    pass
