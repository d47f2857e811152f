"""
Validation Schemas
==================

Declarative payload schemas for login, admin registration and products.
`validate()` reports every failing field rather than stopping at the first.
"""

from collections import namedtuple
from typing import Annotated, List, Literal, Optional

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
)
from pydantic_core import PydanticCustomError

CATEGORIES = ('Electronics', 'Clothing', 'Books', 'Home & Garden', 'Sports', 'Toys', 'Other')
STATUSES = ('active', 'inactive', 'draft')
ROLES = ('admin', 'superadmin')

Category = Literal['Electronics', 'Clothing', 'Books', 'Home & Garden', 'Sports', 'Toys', 'Other']
Status = Literal['active', 'inactive', 'draft']
Role = Literal['admin', 'superadmin']

Password = Annotated[str, Field(min_length=6)]
ProductName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=200)]
Description = Annotated[str, Field(min_length=10, max_length=2000)]
# Strict numbers: JSON strings and booleans are not coerced
Price = Annotated[float, Field(ge=0.01, strict=True)]
Stock = Annotated[int, Field(ge=0, strict=True)]
Sku = Annotated[str, StringConstraints(strip_whitespace=True, min_length=3, max_length=50)]

# Friendlier messages for the common bound violations, keyed by wire field name
FIELD_MESSAGES = {
    'email': 'Invalid email address',
    'password': 'Password must be at least 6 characters',
    'name': 'Name must be at least {min} characters',
    'description': 'Description must be at least 10 characters',
    'price': 'Price must be greater than 0',
    'stock': 'Stock cannot be negative',
    'sku': 'SKU must be at least 3 characters',
}
_BOUND_ERRORS = {'string_too_short', 'greater_than_equal', 'value_error'}

ValidationResult = namedtuple('ValidationResult', ['ok', 'data', 'errors'])


class _Schema(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra='ignore')


class LoginSchema(_Schema):
    email: EmailStr
    password: Password


class RegisterAdminSchema(_Schema):
    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=2)]
    email: EmailStr
    password: Password
    confirm_password: str = Field(alias='confirmPassword')
    role: Role

    @field_validator('confirm_password')
    @classmethod
    def passwords_match(cls, value, info: ValidationInfo):
        password = info.data.get('password')
        if password is not None and value != password:
            raise PydanticCustomError('password_mismatch', 'Passwords do not match')
        return value


_http_url = TypeAdapter(HttpUrl)


def _check_http_url(value):
    """Validate as an http(s) URL but keep the string exactly as sent"""
    try:
        _http_url.validate_python(value)
    except ValidationError:
        raise PydanticCustomError('url_parsing', 'Invalid image URL')
    return value


ImageUrl = Annotated[str, AfterValidator(_check_http_url)]


class ProductImage(_Schema):
    url: ImageUrl
    public_id: str = Field(alias='publicId')


class ProductSchema(_Schema):
    name: ProductName
    description: Description
    category: Category
    price: Price
    stock: Stock
    sku: Sku
    status: Status
    images: Optional[List[ProductImage]] = None


class ProductUpdateSchema(_Schema):
    """Partial product payload: every field optional, none nullable"""
    name: Optional[ProductName] = None
    description: Optional[Description] = None
    category: Optional[Category] = None
    price: Optional[Price] = None
    stock: Optional[Stock] = None
    sku: Optional[Sku] = None
    status: Optional[Status] = None
    images: Optional[List[ProductImage]] = None

    @field_validator('*', mode='before')
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise PydanticCustomError('null_value', 'Field cannot be null')
        return value


def _format_error(error, schema):
    path = [str(part) for part in error['loc']]
    field = path[0] if path else None
    message = error['msg']

    template = FIELD_MESSAGES.get(field)
    if template and len(path) == 1 and error['type'] in _BOUND_ERRORS:
        if field == 'name':
            minimum = 2 if schema is RegisterAdminSchema else 3
            if error['type'] == 'string_too_short':
                message = template.format(min=minimum)
        else:
            message = template

    return {'path': path, 'message': message}


def validate(schema, payload):
    """
    Validate a payload against one of the schemas above.

    Returns:
        ValidationResult(ok=True, data=dict, errors=[]) on success, where data
        uses the wire (camelCase) keys and, for partial schemas, only holds the
        fields that were supplied.
        ValidationResult(ok=False, data=None, errors=[{path, message}, ...])
        listing every failing field otherwise.
    """
    if not isinstance(payload, dict):
        return ValidationResult(False, None, [{'path': [], 'message': 'Request body must be a JSON object'}])

    try:
        model = schema.model_validate(payload)
    except ValidationError as e:
        return ValidationResult(False, None, [_format_error(err, schema) for err in e.errors()])

    data = model.model_dump(mode='json', by_alias=True, exclude_unset=True)
    data.pop('confirmPassword', None)
    return ValidationResult(True, data, [])
