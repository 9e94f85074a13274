import logging as lg
from typing import List, Tuple, Dict

from pbpu.common.ops import Op, encode


class AsmError(Exception):
    pass


Command = Tuple[str, int | Tuple[Op, str]]


class FPP:
    ''' First pass processor '''
    cmd_list: List[Command]
    label_dict: Dict[str, int]

    def __init__(self):
        self.cmd_list = list()
        self.offset = 0
        self.label_dict = dict()

    @staticmethod
    def check_range(what: str, value: int, limit: int):
        if not 0 <= value <= limit:
            raise AsmError(f'{what} {value} out of range 0..{limit}')

    # Handlers
    def issue_byte(self, byte: int):
        self.check_range('Byte', byte, 0xFF)
        self.cmd_list.append(('byte', byte))
        self.offset += 1

    def issue_op(self, args: Tuple[Op, int]):
        op, imm = args
        self.check_range(f'{op.name} operand', imm, 0xF)
        lg.debug(f'Issuing {op.name} {imm:X} @ 0x{self.offset:02X}')
        self.issue_byte(encode(op, imm))

    def issue_ref(self, op: Op, labelname: str):
        self.cmd_list.append(('ref', (op, labelname)))
        self.offset += 1  # placeholder-byte

    def on_label(self, labelname: str):
        if labelname in self.label_dict:
            raise AsmError(f'Duplicate label {labelname}')

        self.label_dict[labelname] = self.offset
        lg.debug(f'Label {labelname} @ 0x{self.offset:02X}')

    # Macros

    # .goto <label>
    # Overwrites the jump staging register
    def issue_goto(self, labelname: str):
        self.issue_ref(Op.PC1, labelname)
        self.issue_ref(Op.PC2, labelname)
        self.issue_op((Op.JMP, 0))

    # .loc <address>
    def issue_loc(self, addr: int):
        self.check_range('Location', addr, 0xFF)
        self.issue_op((Op.WT1, addr >> 4))
        self.issue_op((Op.WT2, addr & 0xF))

    # Second pass
    def resolve(self, op: Op, labelname: str) -> int:
        if labelname not in self.label_dict:
            raise AsmError(f'Unknown label {labelname}')

        target = self.label_dict[labelname]

        if op == Op.PC1:
            return encode(op, target & 0xF)

        return encode(op, target >> 4)
