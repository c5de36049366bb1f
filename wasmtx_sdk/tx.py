"""
Transaction assembly and signing.

Each call builds a fresh body, auth info and SignDoc. The SignDoc carries
the chain id and account number, so a signature cannot be replayed on
another chain or for another account; the auth info carries the account's
current sequence.
"""
import logging
from dataclasses import dataclass

from cosmpy.protos.cosmos.base.v1beta1.coin_pb2 import Coin as CoinProto
from cosmpy.protos.cosmos.crypto.secp256k1.keys_pb2 import PubKey as ProtoPubKey
from cosmpy.protos.cosmos.tx.signing.v1beta1.signing_pb2 import SignMode
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import (
    AuthInfo,
    ModeInfo,
    SignDoc,
    SignerInfo,
    TxBody,
    TxRaw,
)
from cosmpy.protos.cosmos.tx.v1beta1.tx_pb2 import Fee as ProtoFee
from google.protobuf.any_pb2 import Any as ProtoAny
from google.protobuf.message import Message

from .config import ChainConfig
from .exceptions import CodecError, SigningFailedError
from .models import Account, Fee
from .signer import Signer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TxOptions:
    """Per-call body options"""
    memo: str = ""
    timeout_height: int = 0


def pack_any(message: Message) -> ProtoAny:
    packed = ProtoAny()
    packed.Pack(message, type_url_prefix="/")
    return packed


def build_tx_body(msg: Message, options: TxOptions) -> TxBody:
    body = TxBody(memo=options.memo, timeout_height=options.timeout_height)
    body.messages.append(pack_any(msg))
    return body


def build_auth_info(signer: Signer, account: Account, fee: Fee) -> AuthInfo:
    public_key = pack_any(ProtoPubKey(key=signer.public_key.public_key_bytes))
    signer_info = SignerInfo(
        public_key=public_key,
        mode_info=ModeInfo(single=ModeInfo.Single(mode=SignMode.SIGN_MODE_DIRECT)),
        sequence=account.sequence,
    )
    # a zero fee is an empty coin list; the SDK rejects zero-amount coins
    amount = []
    if fee.amount.amount > 0:
        amount.append(CoinProto(denom=fee.amount.denom, amount=str(fee.amount.amount)))
    return AuthInfo(
        signer_infos=[signer_info],
        fee=ProtoFee(amount=amount, gas_limit=fee.gas_limit),
    )


def build_signed_tx(
    config: ChainConfig,
    msg: Message,
    fee: Fee,
    signer: Signer,
    account: Account,
    options: TxOptions,
) -> bytes:
    """
    Build, sign and serialize a single-message transaction.

    Args:
        config: Chain configuration (provides the chain id)
        msg: Contract lifecycle message
        fee: Fee and gas limit to attach
        signer: Signing identity
        account: Freshly resolved account of the signer
        options: Memo and timeout height

    Returns:
        Serialized ``TxRaw`` bytes ready for broadcast

    Raises:
        SigningFailedError: If the signing primitive fails
        CodecError: If the transaction cannot be serialized
    """
    try:
        body_bytes = build_tx_body(msg, options).SerializeToString()
        auth_info_bytes = build_auth_info(signer, account, fee).SerializeToString()
        sign_doc = SignDoc(
            body_bytes=body_bytes,
            auth_info_bytes=auth_info_bytes,
            chain_id=config.chain_id,
            account_number=account.account_number,
        ).SerializeToString()
    except SigningFailedError:
        raise
    except Exception as e:
        raise CodecError(f"Failed to encode transaction: {e}") from e

    try:
        signature = signer.sign(sign_doc)
    except Exception as e:
        logger.error(f"Transaction signing failed: {e}")
        raise SigningFailedError(f"Failed to sign transaction: {e}") from e

    return TxRaw(
        body_bytes=body_bytes,
        auth_info_bytes=auth_info_bytes,
        signatures=[signature],
    ).SerializeToString()
