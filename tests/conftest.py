import pytest

GIVE_FRAMESET = """<?xml version="1.0" encoding="UTF-8"?>
<frameset>
  <predicate lemma="give">
    <roleset id="give.01" name="transfer" vncls="13.1" framnet="Giving">
      <aliases>
        <alias pos="v" framenet="Giving" verbnet="13.1">give</alias>
      </aliases>
      <roles>
        <role n="0" f="PAG" descr="giver">
          <vnrole vncls="13.1" vntheta="Agent"/>
        </role>
        <role n="1" f="PPT" descr="thing given"/>
        <role n="2" f="GOL" descr="entity given to"/>
        <role n="7" descr="broken role"/>
      </roles>
      <example name="give-ex1" src="">
        <inflection person="ns" tense="past" aspect="ns" voice="active" form="full"/>
        <text>John gave Mary a book</text>
        <arg n="0">John</arg>
        <rel>gave</rel>
        <arg n="2">Mary</arg>
        <arg n="1">a book</arg>
        <arg n="m" f="tmp">yesterday</arg>
      </example>
      <example name="give-ex2">
        <text>The book was handed over</text>
        <rel>gave</rel>
      </example>
    </roleset>
  </predicate>
  <predicate lemma="give_up">
    <roleset id="give.06" name="surrender">
      <roles>
        <role n="0" descr="quitter"/>
        <role n="1" descr="thing quit"/>
      </roles>
    </roleset>
  </predicate>
</frameset>
"""

MOTION_FRAME = """<?xml version="1.0" encoding="UTF-8"?>
<frame xmlns="http://framenet.icsi.berkeley.edu" cBy="MJE" cDate="02/07/2001 04:12:10 PST Wed" ID="7" name="Motion">
  <definition>&lt;def-root&gt;Some entity (&lt;fex name="Theme"&gt;Theme&lt;/fex&gt;) starts out in one place.&lt;/def-root&gt;</definition>
  <FE ID="1" name="Theme" abbrev="Thm" coreType="Core" cBy="MJE" cDate="13/45/2001 04:12:10 PST Wed">
    <definition>&lt;def-root&gt;The entity that changes location.&lt;/def-root&gt;</definition>
    <semType name="Physical_object" ID="68"/>
    <excludesFE name="Carrier" ID="3"/>
  </FE>
  <FE ID="2" name="Goal" abbrev="Goal" coreType="Core">
    <definition>Where the Theme ends up.</definition>
  </FE>
  <FE ID="2" name="Goal" abbrev="Goal" coreType="Core"/>
  <FE ID="4" name="Manner" abbrev="Man" coreType="Peripheral"/>
  <FEcoreSet>
    <memberFE name="Theme" ID="1"/>
    <memberFE name="Goal" ID="2"/>
  </FEcoreSet>
  <FEcoreSet/>
  <frameRelation type="Inherits from">
    <relatedFrame ID="5">Event</relatedFrame>
  </frameRelation>
  <frameRelation type="Uses">
    <relatedFrame ID="99">Test35</relatedFrame>
  </frameRelation>
  <frameRelation type="Is Used by">
    <relatedFrame ID="6">Travel</relatedFrame>
  </frameRelation>
  <lexUnit ID="10" name="move.v" POS="V" status="Finished_Initial" cBy="MJE" cDate="02/07/2001 04:12:10 PST Wed">
    <definition>COD: go in a specified direction.</definition>
    <semType name="Sentient being" ID="5"/>
    <lexeme order="1" name="move" POS="V"/>
  </lexUnit>
  <lexUnit ID="11" name="make one's way.v" POS="V" incorporatedFE="Path">
    <lexeme order="2" name="one's" POS="PRON"/>
    <lexeme order="1" name="make" POS="V"/>
    <lexeme order="3" name="way" POS="N"/>
  </lexUnit>
</frame>
"""

MOVE_LU = """<?xml version="1.0" encoding="UTF-8"?>
<lexUnit xmlns="http://framenet.icsi.berkeley.edu" ID="10" name="move.v" POS="V" frame="Motion" frameID="7">
  <subCorpus name="V-np-pp">
    <sentence ID="100">
      <text>The cat moved to the door</text>
      <annotationSet ID="1000">
        <layer rank="1" name="Target">
          <label end="12" start="8" name="Target"/>
        </layer>
        <layer rank="1" name="FE">
          <label end="6" start="0" name="Theme"/>
          <label end="24" start="14" name="Goal"/>
          <label end="3" start="1" name="Manner"/>
        </layer>
      </annotationSet>
    </sentence>
    <sentence ID="101">
      <text>Nothing to see here</text>
      <annotationSet ID="1001">
        <layer rank="1" name="Target"/>
      </annotationSet>
    </sentence>
  </subCorpus>
</lexUnit>
"""

ORPHAN_LU = """<?xml version="1.0" encoding="UTF-8"?>
<lexUnit ID="999" name="orphan.n" POS="N" frame="Nowhere">
  <sentence ID="1"><text>An orphan</text></sentence>
</lexUnit>
"""

VERBNET_CLASS = """<?xml version="1.0" encoding="UTF-8"?>
<VNCLASS ID="give-13.1">
  <SUBCLASSES>
    <VNSUBCLASS ID="give-13.1-1"/>
  </SUBCLASSES>
</VNCLASS>
"""

FRAME_DIFF = """<?xml version="1.0" encoding="UTF-8"?>
<Diff>
  <FrameDiff>
    <Changed><Frame><r1-5>Move</r1-5><r1-6>Motion</r1-6></Frame></Changed>
  </FrameDiff>
  <FrameElementDiff>
    <Added><FrameElement FrameName="Motion">Manner</FrameElement></Added>
  </FrameElementDiff>
</Diff>
"""


@pytest.fixture
def frames_dir(tmp_path):
    """PropBank-style frameset directory."""
    root = tmp_path / 'frames'
    root.mkdir()
    (root / 'give.xml').write_text(GIVE_FRAMESET, encoding='utf-8')
    (root / 'except-v.xml').write_text(GIVE_FRAMESET, encoding='utf-8')
    (root / 'broken.xml').write_text('<frameset><predicate lemma="x">', encoding='utf-8')
    (root / 'README.txt').write_text('not a frameset', encoding='utf-8')
    return root


@pytest.fixture
def framenet_dir(tmp_path):
    """FrameNet release directory with frame/, lu/ and a frame diff."""
    root = tmp_path / 'fndata'
    (root / 'frame').mkdir(parents=True)
    (root / 'lu').mkdir()
    (root / 'frame' / 'Motion.xml').write_text(MOTION_FRAME, encoding='utf-8')
    (root / 'lu' / 'lu10.xml').write_text(MOVE_LU, encoding='utf-8')
    (root / 'lu' / 'lu999.xml').write_text(ORPHAN_LU, encoding='utf-8')
    (root / 'frameDiff.xml').write_text(FRAME_DIFF, encoding='utf-8')
    return root


@pytest.fixture
def verbnet_dir(tmp_path):
    root = tmp_path / 'verbnet'
    root.mkdir()
    (root / 'give-13.1.xml').write_text(VERBNET_CLASS, encoding='utf-8')
    (root / 'broken.xml').write_text('<VNCLASS', encoding='utf-8')
    return root
