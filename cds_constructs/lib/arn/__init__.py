from .parse_arn import Arn, ArnFormatError, has_arn_service, is_arn, parse_arn
