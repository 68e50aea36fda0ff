"""
Rosetta construction API data types.

Request and response shapes are field-exact with the Rosetta JSON schema.
The free-form ``options`` and ``metadata`` maps exchanged between calls are
converted into versioned typed structures here, at the protocol boundary.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


SIGNATURE_TYPE_ECDSA = "ecdsa"
CURVE_SECP256K1 = "secp256k1"

OPTIONS_VERSION = 1
METADATA_VERSION = 1


# =============================================================================
# Identifiers
# =============================================================================

class NetworkIdentifier(BaseModel):
    """Identifies the blockchain and network a request targets."""
    blockchain: str
    network: str


class AccountIdentifier(BaseModel):
    """An account on the chain, addressed by its bech32 string."""
    address: str
    metadata: Optional[Dict[str, Any]] = None


class OperationIdentifier(BaseModel):
    index: int = Field(..., ge=0)
    network_index: Optional[int] = Field(default=None, ge=0)


class Currency(BaseModel):
    symbol: str
    decimals: int = Field(default=0, ge=0)
    metadata: Optional[Dict[str, Any]] = None


class Amount(BaseModel):
    """
    Signed integer value of a currency.

    Rosetta transmits values as strings; integers are accepted and normalised.
    """
    value: str
    currency: Currency

    @field_validator("value", mode="before")
    @classmethod
    def _coerce_value(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value


class Operation(BaseModel):
    """One balance change (debit or credit) of a transaction."""
    operation_identifier: OperationIdentifier
    type: str
    status: Optional[str] = None
    account: Optional[AccountIdentifier] = None
    amount: Optional[Amount] = None
    metadata: Optional[Dict[str, Any]] = None

    @property
    def address(self) -> str:
        """Account address of the operation, empty when unset."""
        return self.account.address if self.account else ""


class PublicKey(BaseModel):
    hex_bytes: str
    curve_type: str

    def to_bytes(self) -> bytes:
        """Decode the hex encoded key bytes."""
        return bytes.fromhex(self.hex_bytes)


class SigningPayload(BaseModel):
    """Bytes an external signer must sign, keyed to the signer's account."""
    account_identifier: AccountIdentifier
    hex_bytes: str
    signature_type: str = SIGNATURE_TYPE_ECDSA


class Signature(BaseModel):
    signing_payload: SigningPayload
    public_key: PublicKey
    signature_type: str
    hex_bytes: str


class TransactionIdentifier(BaseModel):
    hash: str


# =============================================================================
# Typed construction state
# =============================================================================

class ConstructionOptions(BaseModel):
    """
    Options produced by Preprocess and consumed by Metadata.

    Every field is optional so that presence is checked by the resolver in a
    fixed order rather than rejected wholesale on conversion.
    """
    model_config = ConfigDict(extra="ignore")

    version: int = OPTIONS_VERSION
    address: Optional[str] = None
    memo: Optional[str] = None
    # Passed through as given; only Payloads needs a whole gas limit
    gas: Optional[Union[int, float]] = None

    @field_validator("memo", mode="before")
    @classmethod
    def _coerce_memo(cls, value: Any) -> Any:
        if value is not None and not isinstance(value, str):
            return str(value)
        return value

    @classmethod
    def from_options(cls, options: Dict[str, Any]) -> "ConstructionOptions":
        """Convert a free-form options map."""
        return cls.model_validate(options)

    def to_options(self) -> Dict[str, Any]:
        """Convert back to the free-form map sent over the wire."""
        return self.model_dump(exclude_none=True)


class TransactionMetadata(BaseModel):
    """
    Chain state needed to assemble a transaction.

    All five chain fields are required; conversion fails if any is absent.
    Gas is carried as received and only turned into a limit by ``gas_limit``.
    """
    model_config = ConfigDict(extra="ignore")

    version: int = METADATA_VERSION
    account_number: int = Field(..., ge=0)
    sequence: int = Field(..., ge=0)
    chain_id: str = Field(..., min_length=1)
    gas: Union[int, float]
    memo: str

    @classmethod
    def from_metadata(cls, metadata: Dict[str, Any]) -> "TransactionMetadata":
        """Convert a free-form metadata map."""
        return cls.model_validate(metadata)

    def to_metadata(self) -> Dict[str, Any]:
        """Convert back to the free-form map sent over the wire."""
        return self.model_dump()

    def gas_limit(self) -> int:
        """
        Gas as the unsigned integer limit of a transaction.

        Raises:
            ValueError: If gas is negative or not a whole number
        """
        if isinstance(self.gas, float) and not self.gas.is_integer():
            raise ValueError(f"gas must be a whole number, got {self.gas}")
        if self.gas < 0:
            raise ValueError(f"gas must not be negative, got {self.gas}")
        return int(self.gas)


# =============================================================================
# Errors
# =============================================================================

class ErrorEnvelope(BaseModel):
    """Rosetta error object returned for every failed call."""
    code: int
    message: str
    description: Optional[str] = None
    retriable: bool = False
    details: Optional[Dict[str, Any]] = None


# =============================================================================
# Requests / responses
# =============================================================================

class ConstructionPreprocessRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    operations: List[Operation]
    metadata: Optional[Dict[str, Any]] = None
    max_fee: Optional[List[Amount]] = None
    suggested_fee_multiplier: Optional[float] = Field(default=None, ge=0)


class ConstructionPreprocessResponse(BaseModel):
    options: Optional[Dict[str, Any]] = None
    required_public_keys: Optional[List[AccountIdentifier]] = None


class ConstructionMetadataRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    options: Optional[Dict[str, Any]] = None
    public_keys: Optional[List[PublicKey]] = None


class ConstructionMetadataResponse(BaseModel):
    metadata: Dict[str, Any]
    suggested_fee: Optional[List[Amount]] = None


class ConstructionPayloadsRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    operations: List[Operation]
    metadata: Optional[Dict[str, Any]] = None
    public_keys: Optional[List[PublicKey]] = None


class ConstructionPayloadsResponse(BaseModel):
    unsigned_transaction: str
    payloads: List[SigningPayload]


class ConstructionDeriveRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    public_key: PublicKey
    metadata: Optional[Dict[str, Any]] = None


class ConstructionDeriveResponse(BaseModel):
    account_identifier: AccountIdentifier
    metadata: Optional[Dict[str, Any]] = None


class ConstructionCombineRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    unsigned_transaction: str
    signatures: List[Signature]


class ConstructionCombineResponse(BaseModel):
    signed_transaction: str


class ConstructionHashRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    signed_transaction: str


class ConstructionParseRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    signed: bool
    transaction: str


class ConstructionParseResponse(BaseModel):
    operations: List[Operation]
    account_identifier_signers: Optional[List[AccountIdentifier]] = None
    metadata: Optional[Dict[str, Any]] = None


class ConstructionSubmitRequest(BaseModel):
    network_identifier: Optional[NetworkIdentifier] = None
    signed_transaction: str


class TransactionIdentifierResponse(BaseModel):
    transaction_identifier: TransactionIdentifier
    metadata: Optional[Dict[str, Any]] = None
