"""
Custom domain models: DNS records to create and the propagation check result
"""
from typing import List

from pydantic import BaseModel, Field


class DNSRecord(BaseModel):
    type: str
    name: str
    value: str
    ttl: int = 3600


class DNSInstructions(BaseModel):
    a_record: DNSRecord
    www_record: DNSRecord
    verification_record: DNSRecord


class DNSRecordChecks(BaseModel):
    a_record: bool = False
    www_record: bool = False
    txt_record: bool = False


class DNSVerificationResult(BaseModel):
    is_propagated: bool
    details: DNSRecordChecks = Field(default_factory=DNSRecordChecks)
    errors: List[str] = Field(default_factory=list)
    propagation_time_ms: int = 0


class ConnectDomainRequest(BaseModel):
    domain: str = Field(..., min_length=3, max_length=253)


class DomainOptionsUpdate(BaseModel):
    redirect_www: bool = True
    redirect_https: bool = True
