# dec3vm CPU — word codec, opcode decoder, register file, ALU
