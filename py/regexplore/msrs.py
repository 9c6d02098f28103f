"""Built-in x86 model-specific register catalogues."""

from __future__ import annotations

from .catalogue import Catalogue, RegisterDescriptor
from .enums import AccessClass

__all__ = [ 'BASE_MSRS', 'LOCK_INTEL', ]

RO = AccessClass.RO
RW = AccessClass.RW

EFER = 0xC0000080
STAR = 0xC0000081
LSTAR = 0xC0000082
CSTAR = 0xC0000083
SYSCALL_MASK = 0xC0000084
FS_BASE = 0xC0000100
GS_BASE = 0xC0000101
KERNEL_GS_BASE = 0xC0000102
TSC_AUX = 0xC0000103

# Hyper-V synthetic MSRs, as exposed by KVM/QEMU with hv-* enlightenments
HV_X64_RESET = 0x40000003
HV_X64_TSC_FREQUENCY = 0x40000022
HV_X64_APIC_FREQUENCY = 0x40000023
HV_X64_REENLIGHTENMENT_CONTROL = 0x40000106
HV_X64_TSC_EMULATION_CONTROL = 0x40000107
HV_X64_TSC_EMULATION_STATUS = 0x40000108

BASE_MSRS = Catalogue([
    RegisterDescriptor(EFER, 'EFER', RW, 'Extended feature enables'),
    RegisterDescriptor(STAR, 'STAR', RW, 'Legacy mode SYSCALL target'),
    RegisterDescriptor(LSTAR, 'LSTAR', RW, 'Long mode SYSCALL target'),
    RegisterDescriptor(CSTAR, 'CSTAR', RW, 'Compat mode SYSCALL target'),
    RegisterDescriptor(SYSCALL_MASK, 'SYSCALL_MASK', RW, 'EFLAGS mask for SYSCALL'),
    RegisterDescriptor(FS_BASE, 'FS_BASE', RW, '64-bit FS base'),
    RegisterDescriptor(GS_BASE, 'GS_BASE', RW, '64-bit GS base'),
    RegisterDescriptor(KERNEL_GS_BASE, 'KERNEL_GS_BASE', RW, 'SwapGS GS shadow'),
    RegisterDescriptor(TSC_AUX, 'TSC_AUX', RW, 'Auxiliary TSC value for RDTSCP'),
    RegisterDescriptor(HV_X64_RESET, 'HV_X64_RESET', RW, 'Hyper-V partition reset'),
    RegisterDescriptor(HV_X64_TSC_FREQUENCY, 'HV_X64_TSC_FREQUENCY', RO, 'Hyper-V TSC frequency (Hz)'),
    RegisterDescriptor(HV_X64_APIC_FREQUENCY, 'HV_X64_APIC_FREQUENCY', RO, 'Hyper-V APIC timer frequency (Hz)'),
    RegisterDescriptor(HV_X64_REENLIGHTENMENT_CONTROL, 'HV_X64_REENLIGHTENMENT_CONTROL', RW,
                       'Hyper-V reenlightenment notification control'),
    RegisterDescriptor(HV_X64_TSC_EMULATION_CONTROL, 'HV_X64_TSC_EMULATION_CONTROL', RW,
                       'Hyper-V TSC emulation control'),
    RegisterDescriptor(HV_X64_TSC_EMULATION_STATUS, 'HV_X64_TSC_EMULATION_STATUS', RW,
                       'Hyper-V TSC emulation status'),
], name='msr')

# MSRs that firmware is expected to lock on Intel platforms. On parts with
# hyperthreading some of these are only readable on one thread of a pair.
LOCK_INTEL = Catalogue([
    RegisterDescriptor(0x3A, 'IA32_FEATURE_CONTROL', RW, 'VMX/SMX enables, bit 0 is the lock'),
    RegisterDescriptor(0x9B, 'IA32_SMM_MONITOR_CTL', RW, 'SMM monitor configuration'),
    RegisterDescriptor(0xE2, 'MSR_PKG_CST_CONFIG_CONTROL', RW, 'C-state limits, bit 15 is the CFG lock'),
    RegisterDescriptor(0x1F2, 'IA32_SMRR_PHYSBASE', RW, 'SMRR range base'),
    RegisterDescriptor(0x1F3, 'IA32_SMRR_PHYSMASK', RW, 'SMRR range mask'),
    RegisterDescriptor(0x4E0, 'MSR_SMM_FEATURE_CONTROL', RW, 'SMM code access check, bit 0 is the lock'),
    RegisterDescriptor(0x610, 'MSR_PKG_POWER_LIMIT', RW, 'RAPL package power limit, bit 63 is the lock'),
], name='lock-intel')
