from .ModelValidator import ModelValidator
